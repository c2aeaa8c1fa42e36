"""Unit tests for logging configuration and the JSON formatter."""

import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from sce.config.models import LoggingConfig
from sce.logging import analysis_context, configure_logging
from sce.logging.handlers import JSONFormatter


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Save and restore root logger state between tests."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    for handler in root.handlers:
        if handler not in original_handlers:
            handler.close()
    root.handlers[:] = original_handlers
    root.setLevel(original_level)


def _record(msg: str = "Parsed %d track(s)", args: tuple = (2,)) -> logging.LogRecord:
    return logging.LogRecord(
        name="sce.manifest.hls",
        level=logging.INFO,
        pathname="hls.py",
        lineno=10,
        msg=msg,
        args=args,
        exc_info=None,
    )


class TestConfigureLogging:
    """Tests for configure_logging()."""

    @pytest.mark.parametrize(
        "level,expected",
        [
            ("debug", logging.DEBUG),
            ("info", logging.INFO),
            ("WARNING", logging.WARNING),
            ("error", logging.ERROR),
        ],
    )
    def test_levels(self, level: str, expected: int) -> None:
        """The root logger level follows the config."""
        configure_logging(LoggingConfig(level=level))
        assert logging.getLogger().level == expected

    def test_stderr_by_default(self) -> None:
        """Without a file, a single stderr handler is installed."""
        configure_logging(LoggingConfig())
        (handler,) = logging.getLogger().handlers
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stderr

    def test_json_format(self) -> None:
        """json format installs JSONFormatter."""
        configure_logging(LoggingConfig(format="json"))
        (handler,) = logging.getLogger().handlers
        assert isinstance(handler.formatter, JSONFormatter)

    def test_file_handler(self, tmp_path: Path) -> None:
        """A log file gets a rotating handler and creates its directory."""
        log_file = tmp_path / "logs" / "sce.log"
        configure_logging(LoggingConfig(file=log_file, max_bytes=1024, backup_count=2))

        (handler,) = logging.getLogger().handlers
        assert isinstance(handler, RotatingFileHandler)
        assert handler.maxBytes == 1024
        assert handler.backupCount == 2
        assert log_file.parent.is_dir()

    def test_unopenable_file_falls_back_to_stderr(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A log file that cannot be created is replaced by stderr."""
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        configure_logging(LoggingConfig(file=blocker / "sce.log"))

        (handler,) = logging.getLogger().handlers
        assert not isinstance(handler, RotatingFileHandler)
        assert isinstance(handler, logging.StreamHandler)
        assert "Could not open log file" in capsys.readouterr().err

    def test_file_and_stderr(self, tmp_path: Path) -> None:
        """include_stderr adds a stderr handler next to the file."""
        configure_logging(
            LoggingConfig(file=tmp_path / "sce.log", include_stderr=True)
        )
        assert len(logging.getLogger().handlers) == 2

    def test_text_format_includes_url_tag(self, tmp_path: Path) -> None:
        """Text records written during an analysis carry the page tag."""
        log_file = tmp_path / "sce.log"
        configure_logging(LoggingConfig(file=log_file))

        with analysis_context("https://example.com/watch"):
            logging.getLogger("sce.test").info("Detecting players")
        for handler in logging.getLogger().handlers:
            handler.flush()

        line = log_file.read_text().strip()
        assert "[https://example.com/watch] sce.test - INFO - Detecting players" in line

    def test_replaces_existing_handlers(self) -> None:
        """Reconfiguring does not stack handlers."""
        configure_logging(LoggingConfig())
        configure_logging(LoggingConfig())
        assert len(logging.getLogger().handlers) == 1


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_basic_fields(self) -> None:
        """Output is a JSON object with the core fields."""
        data = json.loads(JSONFormatter().format(_record()))

        assert data["level"] == "INFO"
        assert data["message"] == "Parsed 2 track(s)"
        assert data["logger"] == "sce.manifest.hls"
        assert data["timestamp"].endswith("+00:00")
        assert "context" not in data
        assert "exception" not in data

    def test_extra_attributes_become_context(self) -> None:
        """Non-standard record attributes are reported as context."""
        record = _record()
        record.manifest_url = "https://cdn.example.com/master.m3u8"
        data = json.loads(JSONFormatter().format(record))
        assert data["context"] == {"manifest_url": "https://cdn.example.com/master.m3u8"}

    def test_page_url_from_filter(self) -> None:
        """The filter-injected page URL appears in context; the tag does not."""
        record = _record()
        record.page_url = "https://example.com/watch"
        record.url_tag = "[https://example.com/watch] "
        data = json.loads(JSONFormatter().format(record))
        assert data["context"] == {"page_url": "https://example.com/watch"}

    def test_exception(self) -> None:
        """Tracebacks are included."""
        try:
            raise ValueError("bad manifest")
        except ValueError:
            record = _record()
            record.exc_info = sys.exc_info()
        data = json.loads(JSONFormatter().format(record))
        assert "ValueError: bad manifest" in data["exception"]

    def test_root_logger_name_omitted(self) -> None:
        """The root logger name is not reported."""
        record = _record()
        record.name = "root"
        assert "logger" not in json.loads(JSONFormatter().format(record))
