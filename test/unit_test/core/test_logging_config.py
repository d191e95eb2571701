"""
Unit tests for the logging configuration module.
"""

import json
import logging
import sys

import pytest

from alexandria.core import logging_config
from alexandria.core.logging_config import (
    DETAILED_FORMAT,
    MODULE_LOG_LEVELS,
    SIMPLE_FORMAT,
    JsonFormatter,
    get_logger,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    setup_logging(enable_file=False)


def _console_handler() -> logging.Handler:
    handlers = [h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler]
    assert len(handlers) == 1
    return handlers[0]


class TestSetupLogging:
    def test_console_level_override(self):
        setup_logging(log_level="warning", enable_file=False)
        assert _console_handler().level == logging.WARNING
        assert logging.getLogger().level == logging.DEBUG

    @pytest.mark.parametrize(
        "fmt,expected",
        [("simple", SIMPLE_FORMAT), ("detailed", DETAILED_FORMAT), ("other", DETAILED_FORMAT)],
    )
    def test_formats(self, fmt, expected):
        setup_logging(log_format=fmt, enable_file=False)
        assert _console_handler().formatter._fmt == expected

    def test_json_format(self):
        setup_logging(log_format="json", enable_file=False)
        assert isinstance(_console_handler().formatter, JsonFormatter)

    def test_does_not_duplicate_handlers(self):
        setup_logging(enable_file=False)
        setup_logging(enable_file=False)
        assert len(logging.getLogger().handlers) == 1

    def test_module_levels_applied(self):
        setup_logging(enable_file=False)
        for name, level in MODULE_LOG_LEVELS.items():
            assert logging.getLogger(name).level == logging.getLevelName(level)

    def test_ledger_logs_at_debug(self):
        setup_logging(enable_file=False)
        assert logging.getLogger("alexandria.ledger.service").getEffectiveLevel() == logging.DEBUG

    def test_file_logging(self, tmp_path, monkeypatch):
        monkeypatch.setattr(logging_config, "ENABLE_FILE_LOGGING", True)
        monkeypatch.setattr(logging_config, "LOG_FILE_DIR", str(tmp_path / "logs"))

        setup_logging()

        file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert (tmp_path / "logs").is_dir()
        file_handlers[0].close()

    def test_file_logging_can_be_skipped(self, tmp_path, monkeypatch):
        monkeypatch.setattr(logging_config, "ENABLE_FILE_LOGGING", True)
        monkeypatch.setattr(logging_config, "LOG_FILE_DIR", str(tmp_path / "logs"))

        setup_logging(enable_file=False)

        assert not any(isinstance(h, logging.FileHandler) for h in logging.getLogger().handlers)
        assert not (tmp_path / "logs").exists()


class TestGetLogger:
    def test_returns_named_logger(self):
        logger = get_logger("alexandria.ledger.service")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "alexandria.ledger.service"

    def test_same_instance(self):
        assert get_logger("alexandria.points") is get_logger("alexandria.points")


class TestJsonFormatter:
    def _record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord(
            "alexandria.ledger.service", logging.INFO, "service.py", 10, 'Payment "verified"', None, None
        )
        record.__dict__.update(extra)
        return record

    def test_message_is_escaped(self):
        payload = json.loads(JsonFormatter().format(self._record()))
        assert payload["message"] == 'Payment "verified"'
        assert payload["level"] == "INFO"
        assert payload["logger"] == "alexandria.ledger.service"

    def test_context_fields_included(self):
        payload = json.loads(JsonFormatter().format(self._record(reference="ALX_1", user_id=7, unrelated="x")))
        assert payload["reference"] == "ALX_1"
        assert payload["user_id"] == 7
        assert "unrelated" not in payload

    def test_exception_rendered(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = self._record()
            record.exc_info = sys.exc_info()
        payload = json.loads(JsonFormatter().format(record))
        assert "ValueError: boom" in payload["exception"]
