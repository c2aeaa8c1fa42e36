"""Configuration models for SCE.

All models validate in __post_init__ and raise ValueError on bad values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

VALID_LOG_LEVELS = frozenset({"debug", "info", "warning", "error"})
VALID_LOG_FORMATS = frozenset({"text", "json"})


@dataclass
class BrowserConfig:
    """Settings for live page analysis with Playwright."""

    headless: bool = True

    # Navigation timeout in milliseconds
    navigation_timeout_ms: int = 30_000

    # Extra wait after DOMContentLoaded so players can initialize
    settle_ms: int = 1_000

    # Override the browser's User-Agent header
    user_agent: str | None = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.navigation_timeout_ms <= 0:
            raise ValueError(
                f"navigation_timeout_ms must be positive, got {self.navigation_timeout_ms}"
            )
        if self.settle_ms < 0:
            raise ValueError(f"settle_ms must be non-negative, got {self.settle_ms}")


@dataclass
class FetchConfig:
    """Settings for fetching manifests over HTTP."""

    timeout_seconds: float = 15.0

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.timeout_seconds <= 0:
            raise ValueError(
                f"timeout_seconds must be positive, got {self.timeout_seconds}"
            )


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.level.lower() not in VALID_LOG_LEVELS:
            raise ValueError(
                f"level must be one of {sorted(VALID_LOG_LEVELS)}, got {self.level}"
            )
        if self.format.lower() not in VALID_LOG_FORMATS:
            raise ValueError(
                f"format must be one of {sorted(VALID_LOG_FORMATS)}, got {self.format}"
            )


@dataclass
class SCEConfig:
    """Complete SCE configuration."""

    browser: BrowserConfig = field(default_factory=BrowserConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
