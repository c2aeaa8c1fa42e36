"""CLI module for the Streaming Compliance Engine."""

import logging
from pathlib import Path

import click

from sce.cli.exit_codes import ExitCode
from sce.config import ConfigError, SCEConfig, get_config
from sce.logging import configure_logging

logger = logging.getLogger(__name__)


def get_context_config(ctx: click.Context) -> SCEConfig:
    """Return the configuration loaded by the command group.

    Commands invoked outside the group (for example directly from tests)
    load the default configuration instead.
    """
    obj = ctx.find_object(dict)
    if obj is not None and "config" in obj:
        return obj["config"]
    return get_config()


@click.group()
@click.version_option(package_name="streaming-compliance-engine")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: ~/.sce/config.toml or $SCE_CONFIG_PATH).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Streaming Compliance Engine - EN 301 549 Clause 7 checks for video pages."""
    ctx.ensure_object(dict)

    try:
        config = get_config(
            config_path=config_path,
            log_level=log_level,
            log_file=log_file,
            log_format="json" if log_json else None,
            strict=config_path is not None,
        )
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(ExitCode.CONFIG_ERROR)

    configure_logging(config.logging)
    logger.debug("Configuration loaded: %s", config)
    ctx.obj["config"] = config


# Defer import to avoid circular dependency
def _register_commands():
    from sce.cli.analyze import analyze_command
    from sce.cli.clauses import clauses_command
    from sce.cli.manifest import manifest_command
    from sce.cli.snapshot import snapshot_command

    main.add_command(analyze_command)
    main.add_command(clauses_command)
    main.add_command(manifest_command)
    main.add_command(snapshot_command)


_register_commands()
