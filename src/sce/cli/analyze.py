"""CLI analyze command: live analysis of a streaming page."""

import asyncio
import dataclasses
import logging
import sys

import click

from sce.analysis import AnalysisError, BrowserUnavailableError, NavigationError
from sce.analysis.live import analyze_url
from sce.cli import get_context_config
from sce.cli.exit_codes import ExitCode
from sce.reports import format_human, format_json

logger = logging.getLogger(__name__)


@click.command("analyze")
@click.argument("url")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    help="Output format (default: human)",
)
@click.option(
    "--headful",
    is_flag=True,
    help="Show the browser window instead of running headless",
)
@click.option(
    "--timeout",
    "timeout_ms",
    type=click.IntRange(min=1),
    default=None,
    help="Navigation timeout in milliseconds",
)
@click.option(
    "--settle",
    "settle_ms",
    type=click.IntRange(min=0),
    default=None,
    help="Wait after the page loads before analyzing, in milliseconds",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Exit with a non-zero code when a critical clause fails",
)
@click.pass_context
def analyze_command(
    ctx: click.Context,
    url: str,
    output_format: str,
    headful: bool,
    timeout_ms: int | None,
    settle_ms: int | None,
    strict: bool,
) -> None:
    """Load a page in Chromium and evaluate EN 301 549 Clause 7.

    URL is the page hosting the video player. Manifests requested while the
    page loads are captured and inspected for caption and audio description
    tracks.
    """
    browser_config = get_context_config(ctx).browser

    overrides: dict = {}
    if headful:
        overrides["headless"] = False
    if timeout_ms is not None:
        overrides["navigation_timeout_ms"] = timeout_ms
    if settle_ms is not None:
        overrides["settle_ms"] = settle_ms
    if overrides:
        browser_config = dataclasses.replace(browser_config, **overrides)

    try:
        result = asyncio.run(analyze_url(url, browser_config))
    except BrowserUnavailableError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.TOOL_NOT_AVAILABLE)
    except NavigationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.TARGET_NOT_FOUND)
    except AnalysisError as e:
        click.echo(f"Error: Analysis failed for {url}", err=True)
        click.echo(f"Reason: {e}", err=True)
        sys.exit(ExitCode.ANALYSIS_ERROR)

    if output_format == "json":
        click.echo(format_json(result, source=url))
    else:
        click.echo(format_human(result, source=url))

    if strict and result.has_critical_failures:
        logger.info("Critical Clause 7 failures found for %s", url)
        sys.exit(ExitCode.CRITICAL)
