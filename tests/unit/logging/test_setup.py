"""Unit tests for argmatch.logging.setup module.

Tests cover:
- configure_logging function
- get_logger and get_module_logger functions
- Test logging suppression in test environment
- Parse failures logged by the error reporter
"""

import logging

import pytest
import structlog
from structlog.testing import capture_logs

from argmatch.logging.setup import (
    configure_logging,
    get_logger,
    get_module_logger,
    _is_test_environment,
)
from argmatch.parsing import CommandLineParser, ParseError, StyleConfig


@pytest.mark.unit
class TestIsTestEnvironment:
    """Test suite for _is_test_environment helper."""

    def test_detects_pytest_in_sys_modules(self):
        """Returns True when pytest is in sys.modules."""
        assert _is_test_environment() is True


@pytest.mark.unit
class TestConfigureLogging:
    """Test suite for configure_logging function."""

    def test_configure_logging_returns_bound_logger(self, mock_settings):
        """configure_logging returns a logger with the standard methods."""
        result = configure_logging(settings=mock_settings)

        assert result is not None
        assert hasattr(result, "info")
        assert hasattr(result, "debug")
        assert hasattr(result, "warning")
        assert hasattr(result, "error")

    def test_configure_logging_with_overrides(self, mock_settings):
        """configure_logging accepts log_level and is_production."""
        assert configure_logging(settings=mock_settings, log_level="DEBUG") is not None
        assert configure_logging(settings=mock_settings, is_production=True) is not None

    def test_configure_logging_idempotent(self, mock_settings):
        """Multiple configure_logging calls are safe."""
        logger1 = configure_logging(settings=mock_settings)
        logger2 = configure_logging(settings=mock_settings)

        assert logger1 is not None
        assert logger2 is not None

    def test_configure_logging_suppresses_in_test_env(self, mock_settings):
        """In test environment, the argmatch logger level is set high to suppress output."""
        configure_logging(settings=mock_settings)

        assert logging.getLogger("argmatch").level >= logging.CRITICAL

    def test_configure_logging_keeps_root_handlers_in_test_env(self, mock_settings):
        """The host application's root handlers and level survive configure_logging."""
        root_logger = logging.getLogger()
        handler = logging.NullHandler()
        root_logger.addHandler(handler)
        original_level = root_logger.level
        try:
            configure_logging(settings=mock_settings)

            assert handler in root_logger.handlers
            assert root_logger.level == original_level
        finally:
            root_logger.removeHandler(handler)

    def test_configure_logging_uses_default_settings(self):
        """Without settings the module singleton is used."""
        assert configure_logging() is not None


@pytest.mark.unit
class TestGetLogger:
    """Test suite for get_logger and get_module_logger."""

    def test_get_logger_with_name(self, mock_settings):
        """get_logger binds the given name."""
        configure_logging(settings=mock_settings)

        logger = get_logger("argmatch.test")

        assert hasattr(logger, "bind")
        assert hasattr(logger, "info")

    def test_get_logger_without_name(self, mock_settings):
        """get_logger detects the calling module."""
        configure_logging(settings=mock_settings)

        logger = get_logger()

        assert hasattr(logger, "info")

    def test_get_module_logger(self, mock_settings):
        """get_module_logger returns a usable logger."""
        configure_logging(settings=mock_settings)

        logger = get_module_logger()

        assert hasattr(logger, "debug")
        logger.debug("test_event", key="value")

    def test_logging_methods_dont_raise(self, mock_settings):
        """Logging methods execute without raising exceptions."""
        configure_logging(settings=mock_settings)

        log = structlog.get_logger().bind(component="test")

        log.debug("debug message", extra="data")
        log.info("info message", key="value")
        log.warning("warning message")
        log.error("error message", error_code="E001")


@pytest.mark.unit
class TestParseEvents:
    """Test suite for events logged while parsing."""

    def test_parse_failure_logged(self):
        """A failed parse logs parse_failed with the error position."""
        parser = CommandLineParser(StyleConfig(first_arg_is_binary=False))

        with capture_logs() as logs:
            with pytest.raises(ParseError):
                parser.parse_line('say "hello')

        failures = [entry for entry in logs if entry["event"] == "parse_failed"]
        assert len(failures) == 1
        assert failures[0]["log_level"] == "warning"
        assert failures[0]["kind"] == "unterminated_quote"
        assert failures[0]["offset"] == 4

    def test_successful_parse_logs_debug_events(self):
        """Lexing and resolution log debug events."""
        parser = CommandLineParser(StyleConfig(first_arg_is_binary=False))

        with capture_logs() as logs:
            parser.parse_line("a --b")

        events = [entry["event"] for entry in logs]
        assert "line_tokenized" in events
        assert "arguments_resolved" in events
