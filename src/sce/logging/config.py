"""Root logger setup for the sce command line."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from sce.logging.context import AnalysisContextFilter
from sce.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from sce.config.models import LoggingConfig

logger = logging.getLogger(__name__)

LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

# url_tag is "[<page>] " during an analysis and empty otherwise
TEXT_FORMAT = "%(asctime)s - %(url_tag)s%(name)s - %(levelname)s - %(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def _formatter(config: LoggingConfig) -> logging.Formatter:
    if config.format.casefold() == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT)


def _open_log_file(config: LoggingConfig) -> logging.Handler | None:
    """Return a rotating handler for config.file, or None if it can't be opened."""
    path = Path(config.file).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"Warning: Could not open log file {config.file}: {e}\n")
        return None


def configure_logging(config: LoggingConfig) -> None:
    """Replace the root logger's handlers according to config.

    Records go to the rotating log file when one is configured, and to
    stderr when include_stderr is set or no file could be opened. Every
    handler tags records with the page under analysis.
    """
    level = LEVELS.get(config.level.casefold(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handlers: list[logging.Handler] = []
    if config.file:
        file_handler = _open_log_file(config)
        if file_handler is not None:
            handlers.append(file_handler)
    if config.include_stderr or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    formatter = _formatter(config)
    context_filter = AnalysisContextFilter()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root.addHandler(handler)

    logger.debug(
        "Logging configured: level=%s format=%s file=%s",
        logging.getLevelName(level),
        config.format,
        config.file,
    )
