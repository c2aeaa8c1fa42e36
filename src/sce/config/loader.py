"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to get_config)
2. Environment variables (SCE_*)
3. Config file (~/.sce/config.toml)
4. Default values

Environment variables:
- SCE_CONFIG_PATH: Path to config file (overrides default location)
- SCE_HEADLESS: Run the browser headless (default true)
- SCE_NAVIGATION_TIMEOUT_MS: Page navigation timeout
- SCE_SETTLE_MS: Wait after DOMContentLoaded before analyzing
- SCE_USER_AGENT: Browser User-Agent override
- SCE_FETCH_TIMEOUT: Manifest fetch timeout in seconds
- SCE_LOG_LEVEL, SCE_LOG_FILE, SCE_LOG_FORMAT: Logging settings
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from sce.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from sce.config.env import EnvReader
from sce.config.models import SCEConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".sce"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


class ConfigError(Exception):
    """Raised when configuration cannot be loaded or is invalid."""


def get_default_config_path(env_reader: EnvReader | None = None) -> Path:
    """Get the config file path, honoring SCE_CONFIG_PATH."""
    reader = env_reader or EnvReader()
    env_path = reader.get_path("SCE_CONFIG_PATH")
    return env_path if env_path is not None else DEFAULT_CONFIG_FILE


def load_config_file(path: Path, *, strict: bool = False) -> dict[str, Any]:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file.
        strict: If True, raise ConfigError on unreadable or invalid files.
            If False (default), log a warning and return an empty dict.

    Returns:
        Parsed configuration dict. Empty dict if the file doesn't exist.

    Raises:
        ConfigError: When strict=True and the file cannot be parsed.
    """
    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        if strict:
            raise ConfigError(f"Cannot load config file {path}: {e}") from e
        logger.warning("Ignoring invalid config file %s: %s", path, e)
        return {}


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    headless: bool | None = None,
    navigation_timeout_ms: int | None = None,
    settle_ms: int | None = None,
    log_level: str | None = None,
    log_file: Path | None = None,
    log_format: str | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> SCEConfig:
    """Get SCE configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides SCE_CONFIG_PATH).
        headless: CLI override for headless browsing.
        navigation_timeout_ms: CLI override for navigation timeout.
        settle_ms: CLI override for the settle delay.
        log_level: CLI override for log level.
        log_file: CLI override for log file.
        log_format: CLI override for log format.
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, raise ConfigError on config file parse failures.

    Returns:
        SCEConfig with merged configuration.

    Raises:
        ConfigError: If the merged values are invalid, or when strict=True
            and the config file cannot be parsed.
    """
    reader = env_reader or EnvReader()
    path = config_path or get_default_config_path(reader)
    file_config = load_config_file(path, strict=strict)

    cli_source = ConfigSource(
        browser_headless=headless,
        browser_navigation_timeout_ms=navigation_timeout_ms,
        browser_settle_ms=settle_ms,
        logging_level=log_level,
        logging_file=log_file,
        logging_format=log_format,
    )

    builder = ConfigBuilder()
    builder.apply(source_from_file(file_config))
    builder.apply(source_from_env(reader))
    builder.apply(cli_source)

    try:
        return builder.build()
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
