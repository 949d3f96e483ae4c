"""
Tests for structured logging configuration.
"""

import logging
from collections.abc import Iterator

import pytest
import structlog

from client_ip.config import get_settings
from client_ip.logging import configure_logging, get_logger


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Undo configure_logging changes to the root logger."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_configure_logging_json_format(self):
        """Test that JSON format configuration works."""
        configure_logging(json_format=True, log_level="INFO")

        config = structlog.get_config()
        assert config["wrapper_class"] is structlog.stdlib.BoundLogger
        assert logging.getLogger().level == logging.INFO

    def test_configure_logging_console_format(self):
        """Test that console format configuration works."""
        configure_logging(json_format=False, log_level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG

    def test_invalid_level_falls_back_to_info(self):
        """Test that an unknown level name does not raise."""
        configure_logging(log_level="chatty")

        assert logging.getLogger().level == logging.INFO

    def test_defaults_from_settings(self, monkeypatch: pytest.MonkeyPatch):
        """Test that LOG_LEVEL and LOG_JSON are used when no arguments are given."""
        monkeypatch.setenv("LOG_LEVEL", "warning")
        monkeypatch.setenv("LOG_JSON", "false")
        get_settings.cache_clear()

        configure_logging()

        assert logging.getLogger().level == logging.WARNING

    def test_replaces_root_handlers(self):
        """Test that a single stdout handler is installed."""
        configure_logging()

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, structlog.stdlib.ProcessorFormatter)


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_returns_bound_logger(self):
        """Test that get_logger returns a structlog logger."""
        logger = get_logger("client_ip.tests")
        assert logger is not None

    def test_get_logger_with_none_name(self):
        """Test that get_logger works without a name."""
        logger = get_logger(None)
        assert logger is not None
