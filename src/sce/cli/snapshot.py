"""CLI snapshot command: offline analysis of a saved page."""

import asyncio
import logging
import sys
from pathlib import Path

import click

from sce.analysis import AnalysisError, analyze_snapshot
from sce.cli.exit_codes import ExitCode
from sce.manifest import CaptureFileError, InterceptedManifest, load_capture_file
from sce.reports import format_human, format_json

logger = logging.getLogger(__name__)


@click.command("snapshot")
@click.argument("html_file", type=click.Path(exists=False, path_type=Path))
@click.option(
    "--capture",
    "-c",
    "capture_file",
    type=click.Path(exists=False, path_type=Path),
    default=None,
    help="YAML capture file listing manifests fetched by the page",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    help="Output format (default: human)",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Exit with a non-zero code when a critical clause fails",
)
def snapshot_command(
    html_file: Path,
    capture_file: Path | None,
    output_format: str,
    strict: bool,
) -> None:
    """Evaluate EN 301 549 Clause 7 against a saved HTML page.

    HTML_FILE is the saved page. Without a script runtime, SDK players are
    recognized by their markup only; native media, tracks and controls are
    analyzed as in a live page.
    """
    if not html_file.is_file():
        click.echo(f"Error: File not found: {html_file}", err=True)
        sys.exit(ExitCode.TARGET_NOT_FOUND)

    manifests: list[InterceptedManifest] = []
    if capture_file is not None:
        if not capture_file.is_file():
            click.echo(f"Error: Capture file not found: {capture_file}", err=True)
            sys.exit(ExitCode.TARGET_NOT_FOUND)
        try:
            manifests = load_capture_file(capture_file)
        except CaptureFileError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(ExitCode.PARSE_ERROR)

    try:
        html = html_file.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        click.echo(f"Error: Cannot read {html_file}: {e}", err=True)
        sys.exit(ExitCode.TARGET_NOT_FOUND)

    try:
        result = asyncio.run(
            analyze_snapshot(html, manifests, source=str(html_file))
        )
    except AnalysisError as e:
        click.echo(f"Error: Analysis failed for {html_file}", err=True)
        click.echo(f"Reason: {e}", err=True)
        sys.exit(ExitCode.ANALYSIS_ERROR)

    if output_format == "json":
        click.echo(format_json(result, source=str(html_file)))
    else:
        click.echo(format_human(result, source=str(html_file)))

    if strict and result.has_critical_failures:
        sys.exit(ExitCode.CRITICAL)
