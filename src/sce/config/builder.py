"""Configuration builder with explicit layering.

Each source (config file, environment, CLI) is turned into a
ConfigSource; ConfigBuilder applies them in precedence order and fills
in defaults for whatever no source specified.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from sce.config.env import EnvReader
from sce.config.models import BrowserConfig, FetchConfig, LoggingConfig, SCEConfig

logger = logging.getLogger(__name__)


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None values indicate "not specified in this source" and will not
    override values from lower-precedence sources.
    """

    # Browser config
    browser_headless: bool | None = None
    browser_navigation_timeout_ms: int | None = None
    browser_settle_ms: int | None = None
    browser_user_agent: str | None = None

    # Fetch config
    fetch_timeout_seconds: float | None = None

    # Logging config
    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None
    logging_max_bytes: int | None = None
    logging_backup_count: int | None = None


class ConfigBuilder:
    """Builds SCEConfig by layering ConfigSources with precedence.

    Later sources override earlier ones (for non-None values).

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config))
        builder.apply(source_from_env(reader))
        builder.apply(cli_source)
        config = builder.build()
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def apply(self, source: ConfigSource) -> None:
        """Apply a configuration source, overriding existing values."""
        for field_obj in fields(source):
            value = getattr(source, field_obj.name)
            if value is not None:
                self._values[field_obj.name] = value

    def _get(self, key: str, default: Any) -> Any:
        return self._values.get(key, default)

    def build(self) -> SCEConfig:
        """Build the final SCEConfig with defaults for unset values.

        Raises:
            ValueError: If a layered value fails model validation.
        """
        browser = BrowserConfig(
            headless=self._get("browser_headless", True),
            navigation_timeout_ms=self._get("browser_navigation_timeout_ms", 30_000),
            settle_ms=self._get("browser_settle_ms", 1_000),
            user_agent=self._get("browser_user_agent", None),
        )
        fetch = FetchConfig(
            timeout_seconds=self._get("fetch_timeout_seconds", 15.0),
        )
        logging_config = LoggingConfig(
            level=self._get("logging_level", "info"),
            file=self._get("logging_file", None),
            format=self._get("logging_format", "text"),
            include_stderr=self._get("logging_include_stderr", False),
            max_bytes=self._get("logging_max_bytes", 10_485_760),
            backup_count=self._get("logging_backup_count", 5),
        )
        return SCEConfig(browser=browser, fetch=fetch, logging=logging_config)


def _section(file_config: dict[str, Any], name: str) -> dict[str, Any]:
    section = file_config.get(name, {})
    if not isinstance(section, dict):
        logger.warning("Ignoring config section [%s]: expected a table", name)
        return {}
    return section


def _optional_path(value: Any) -> Path | None:
    return Path(value).expanduser() if value else None


def source_from_file(file_config: dict[str, Any]) -> ConfigSource:
    """Create ConfigSource from a parsed TOML config file.

    Expected layout:

        [browser]
        headless = true
        navigation_timeout_ms = 30000
        settle_ms = 1000
        user_agent = "..."

        [fetch]
        timeout_seconds = 15.0

        [logging]
        level = "info"
        file = "~/.sce/logs/sce.log"
        format = "text"
    """
    browser = _section(file_config, "browser")
    fetch = _section(file_config, "fetch")
    logging_conf = _section(file_config, "logging")

    return ConfigSource(
        browser_headless=browser.get("headless"),
        browser_navigation_timeout_ms=browser.get("navigation_timeout_ms"),
        browser_settle_ms=browser.get("settle_ms"),
        browser_user_agent=browser.get("user_agent"),
        fetch_timeout_seconds=fetch.get("timeout_seconds"),
        logging_level=logging_conf.get("level"),
        logging_file=_optional_path(logging_conf.get("file")),
        logging_format=logging_conf.get("format"),
        logging_include_stderr=logging_conf.get("include_stderr"),
        logging_max_bytes=logging_conf.get("max_bytes"),
        logging_backup_count=logging_conf.get("backup_count"),
    )


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create ConfigSource from SCE_* environment variables."""
    return ConfigSource(
        browser_headless=reader.get_bool("SCE_HEADLESS"),
        browser_navigation_timeout_ms=reader.get_int("SCE_NAVIGATION_TIMEOUT_MS"),
        browser_settle_ms=reader.get_int("SCE_SETTLE_MS"),
        browser_user_agent=reader.get_str("SCE_USER_AGENT"),
        fetch_timeout_seconds=reader.get_float("SCE_FETCH_TIMEOUT"),
        logging_level=reader.get_str("SCE_LOG_LEVEL"),
        logging_file=reader.get_path("SCE_LOG_FILE"),
        logging_format=reader.get_str("SCE_LOG_FORMAT"),
    )
