"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (config, input)
    20-29: Target errors
    30-39: Tool/dependency errors
    50-59: Analysis errors
    60-69: Warning states
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for SCE CLI commands.

    Organized by category with reserved ranges for future expansion.
    """

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1

    # Validation errors (10-19)
    CONFIG_ERROR = 11

    # Target errors (20-29)
    TARGET_NOT_FOUND = 20  # Page or file could not be loaded

    # Tool/dependency errors (30-39)
    TOOL_NOT_AVAILABLE = 30  # Playwright or its browser is missing

    # Analysis errors (50-59)
    ANALYSIS_ERROR = 50
    PARSE_ERROR = 51
    FETCH_ERROR = 52

    # Warning states (60-69)
    CRITICAL = 61  # Critical clause failed under --strict
