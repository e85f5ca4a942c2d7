"""Tests for logging setup."""

import json
import logging
import sys

import pytest

from tw2panda.tw_logging import (
    LOGGER_NAME,
    JSONFormatter,
    LogCategory,
    debug_context,
    get_category_logger,
    get_logger,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo setup_logging so other tests see a propagating logger."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_handler(self):
        """Test a console handler is attached at the requested level."""
        logger = setup_logging(level="WARNING")
        assert logger.name == LOGGER_NAME
        assert len(logger.handlers) == 1
        assert logger.handlers[0].level == logging.WARNING

    def test_quiet_has_no_console(self):
        """Test quiet mode drops console output."""
        logger = setup_logging(quiet=True)
        assert logger.handlers == []

    def test_verbose(self):
        """Test verbose mode logs debug to the console."""
        logger = setup_logging(verbose=True)
        assert logger.handlers[0].level == logging.DEBUG

    def test_file_handler(self, tmp_path):
        """Test a rotating log file is created, including parent dirs."""
        log_file = tmp_path / "logs" / "tw2panda.log"
        logger = setup_logging(quiet=True, log_file=log_file)
        get_category_logger(LogCategory.MINER).info("mined")
        for handler in logger.handlers:
            handler.flush()
        assert "mined" in log_file.read_text(encoding="utf-8")

    def test_json_file_format(self, tmp_path):
        """Test JSON output carries extra fields."""
        log_file = tmp_path / "tw2panda.jsonl"
        logger = setup_logging(quiet=True, log_file=log_file, log_format="json")
        get_category_logger(LogCategory.RESOLVER).info(
            "built", extra={"operation": "create_resolver", "duration_ms": 1.5}
        )
        for handler in logger.handlers:
            handler.flush()

        entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert entry["message"] == "built"
        assert entry["logger"] == "tw2panda.resolver"
        assert entry["operation"] == "create_resolver"
        assert entry["duration_ms"] == 1.5
        assert "file_path" not in entry


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_exception_included(self):
        """Test exception text is serialized."""
        try:
            raise ValueError("bad value")
        except ValueError:
            record = logging.LogRecord(
                "x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )
        entry = json.loads(JSONFormatter().format(record))
        assert entry["level"] == "ERROR"
        assert "ValueError: bad value" in entry["exception"]


class TestLoggers:
    """Tests for logger helpers."""

    def test_category_names(self):
        """Test category loggers are children of the package logger."""
        assert get_logger().name == "tw2panda"
        for category in LogCategory:
            assert get_category_logger(category).name == f"tw2panda.{category.value}"

    def test_debug_context_restores_levels(self):
        """Test debug_context restores logger and handler levels."""
        logger = setup_logging(level="WARNING")
        original = logger.level
        handler_level = logger.handlers[0].level

        with debug_context(logger) as debug_logger:
            assert debug_logger.level == logging.DEBUG
            assert logger.handlers[0].level == logging.DEBUG

        assert logger.level == original
        assert logger.handlers[0].level == handler_level
