"""Configuration for SCE.

Layered configuration from CLI flags, SCE_* environment variables and
~/.sce/config.toml.
"""

from sce.config.env import EnvReader
from sce.config.loader import (
    DEFAULT_CONFIG_FILE,
    ConfigError,
    get_config,
    get_default_config_path,
    load_config_file,
)
from sce.config.models import BrowserConfig, FetchConfig, LoggingConfig, SCEConfig

__all__ = [
    # Models
    "BrowserConfig",
    "FetchConfig",
    "LoggingConfig",
    "SCEConfig",
    # Loading
    "DEFAULT_CONFIG_FILE",
    "ConfigError",
    "EnvReader",
    "get_config",
    "get_default_config_path",
    "load_config_file",
]
