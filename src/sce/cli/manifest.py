"""CLI manifest command: list the tracks declared by one manifest."""

import logging
import sys
from pathlib import Path

import click

from sce.cli import get_context_config
from sce.cli.exit_codes import ExitCode
from sce.domain import ManifestFormat
from sce.manifest import (
    InterceptedManifest,
    ManifestError,
    ManifestFetchError,
    classify_manifest,
    fetch_manifest,
    parse_manifest,
)
from sce.reports import format_manifest_human, format_manifest_json

logger = logging.getLogger(__name__)


def _is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


@click.command("manifest")
@click.argument("source")
@click.option(
    "--type",
    "-t",
    "manifest_type",
    type=click.Choice([f.value for f in ManifestFormat]),
    default=None,
    help="Manifest format (default: detect from name or Content-Type)",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    help="Output format (default: human)",
)
@click.pass_context
def manifest_command(
    ctx: click.Context,
    source: str,
    manifest_type: str | None,
    output_format: str,
) -> None:
    """Parse an HLS or DASH manifest and list its tracks.

    SOURCE is a local file path or an http(s) URL.
    """
    forced_format = ManifestFormat(manifest_type) if manifest_type else None

    if _is_url(source):
        timeout = get_context_config(ctx).fetch.timeout_seconds
        try:
            record = fetch_manifest(
                source, timeout=timeout, manifest_format=forced_format
            )
        except ManifestFetchError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(ExitCode.FETCH_ERROR)
        except ManifestError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(ExitCode.PARSE_ERROR)
    else:
        path = Path(source)
        if not path.is_file():
            click.echo(f"Error: File not found: {path}", err=True)
            sys.exit(ExitCode.TARGET_NOT_FOUND)

        manifest_format = forced_format or classify_manifest(path.name)
        if manifest_format is None:
            click.echo(
                f"Error: Cannot determine manifest format for {path}; use --type",
                err=True,
            )
            sys.exit(ExitCode.PARSE_ERROR)

        try:
            body = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            click.echo(f"Error: Cannot read {path}: {e}", err=True)
            sys.exit(ExitCode.TARGET_NOT_FOUND)
        record = InterceptedManifest(
            url=str(path), body=body, manifest_format=manifest_format
        )

    info = parse_manifest(record)
    if output_format == "json":
        click.echo(format_manifest_json(info))
    else:
        click.echo(format_manifest_human(info))
