"""
Unit tests for logger_module.

Tests cover:
- Logger initialization and handler attachment
- Log level configuration
- Idempotency of initialization
- Convenience logging methods routed through the library logger
"""

import logging
from unittest.mock import patch, MagicMock
import pytest

import gmaps_platform.config.logger_module as logger_module
from .logger_module import initialize_logger, log_debug, log_info, log_warning, log_error


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Reset logger state before each test."""
    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level
    root_logger.handlers.clear()
    root_logger.setLevel(logging.WARNING)
    logger_module._logger_initialized = False
    yield
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers[:] = saved_handlers
    root_logger.setLevel(saved_level)
    logger_module._logger_initialized = False


def _flush():
    for handler in logging.getLogger().handlers:
        handler.flush()


class TestInitializeLogger:
    """Test cases for initialize_logger function."""

    def test_initialize_logger_default_level(self, tmp_path):
        """Test logger initialization with default parameters."""
        log_file = tmp_path / "logs" / "app.log"

        initialize_logger(log_file=str(log_file))

        root_logger = logging.getLogger()
        assert root_logger.level == logging.INFO
        assert len(root_logger.handlers) == 2

        handler_types = [type(h).__name__ for h in root_logger.handlers]
        assert "StreamHandler" in handler_types
        assert "FileHandler" in handler_types
        assert log_file.exists()

    def test_initialize_logger_invalid_level(self, tmp_path):
        """Test logger initialization with invalid log level defaults to INFO."""
        initialize_logger(log_level="INVALID", log_file=str(tmp_path / "test.log"))

        assert logging.getLogger().level == logging.INFO

    def test_initialize_logger_idempotency(self, tmp_path):
        """Test that multiple calls to initialize_logger don't duplicate handlers."""
        log_file = tmp_path / "test.log"

        initialize_logger(log_file=str(log_file))
        initialize_logger(log_file=str(log_file))
        initialize_logger(log_level="DEBUG", log_file=str(log_file))

        assert len(logging.getLogger().handlers) == 2

    def test_initialize_logger_handler_levels(self, tmp_path):
        """Test that handlers have correct log levels."""
        initialize_logger(log_file=str(tmp_path / "test.log"))

        levels = {}
        for handler in logging.getLogger().handlers:
            levels[type(handler).__name__] = handler.level

        assert levels["StreamHandler"] == logging.INFO
        assert levels["FileHandler"] == logging.DEBUG


class TestConvenienceMethods:
    """Test cases for convenience logging methods."""

    def test_log_info_reaches_file(self, tmp_path):
        log_file = tmp_path / "test.log"
        initialize_logger(log_level="INFO", log_file=str(log_file))

        log_info("Test info message")
        _flush()

        log_content = log_file.read_text()
        assert "INFO" in log_content
        assert "gmaps_platform" in log_content
        assert "Test info message" in log_content

    def test_log_debug_written_at_debug_level(self, tmp_path):
        log_file = tmp_path / "test.log"
        initialize_logger(log_level="DEBUG", log_file=str(log_file))

        log_debug("Rate computation details")
        _flush()

        assert "Rate computation details" in log_file.read_text()

    def test_log_debug_suppressed_at_info_level(self, tmp_path):
        log_file = tmp_path / "test.log"
        initialize_logger(log_level="INFO", log_file=str(log_file))

        log_debug("Hidden detail")
        _flush()

        assert "Hidden detail" not in log_file.read_text()

    @patch('gmaps_platform.config.logger_module.logging.getLogger')
    def test_convenience_methods_call_correct_levels(self, mock_get_logger):
        """Test that convenience methods call the correct logging levels."""
        mock_logger = MagicMock()
        mock_get_logger.return_value = mock_logger

        log_debug("debug message")
        log_info("info message")
        log_warning("warning message")
        log_error("error message")

        mock_get_logger.assert_called_with("gmaps_platform")
        mock_logger.debug.assert_called_once_with("debug message")
        mock_logger.info.assert_called_once_with("info message")
        mock_logger.warning.assert_called_once_with("warning message")
        mock_logger.error.assert_called_once_with("error message")
