"""Shared fixtures for CLI tests."""

import logging

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    """Return a Click test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's config file and SCE_* variables out of CLI runs."""
    for name in (
        "SCE_HEADLESS",
        "SCE_NAVIGATION_TIMEOUT_MS",
        "SCE_SETTLE_MS",
        "SCE_USER_AGENT",
        "SCE_FETCH_TIMEOUT",
        "SCE_LOG_LEVEL",
        "SCE_LOG_FILE",
        "SCE_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SCE_CONFIG_PATH", str(tmp_path / "absent.toml"))


@pytest.fixture(autouse=True)
def reset_root_logger():
    """The command group reconfigures logging; restore it afterwards."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers[:] = original_handlers
    root.setLevel(original_level)
