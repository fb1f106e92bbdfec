"""
Logging utilities for the Google Maps Platform client.

Provides one-time root logger configuration and the convenience
helpers that the transport and API modules log through.
"""

import logging
from pathlib import Path


# Flag to track if logger has been initialized to ensure idempotency
_logger_initialized = False

LIBRARY_LOGGER_NAME = "gmaps_platform"


def initialize_logger(log_level: str = "INFO", log_file: str = "logs/gmaps_platform.log") -> None:
    """
    Initialize the root logger with console and file handlers.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file
    """
    global _logger_initialized

    # Only the first call configures handlers
    if _logger_initialized:
        return

    # Make sure the log directory exists
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    # Root logger level applies to every library logger that propagates
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Clear any existing handlers to prevent duplicates
    root_logger.handlers.clear()

    # Formatters: the file gets source locations, the console does not
    console_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Console handler shows INFO and above
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(console_formatter)

    # File handler keeps DEBUG detail
    file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(file_formatter)

    # Attach handlers to root logger
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    # Mark as initialized
    _logger_initialized = True

    # Log initialization success
    root_logger.info(f"Logger initialized with level {log_level}, file: {log_file}")


def _library_logger() -> logging.Logger:
    # All library modules share the `gmaps_platform` logger
    return logging.getLogger(LIBRARY_LOGGER_NAME)


def log_debug(message: str) -> None:
    """
    Log a debug message.

    Args:
        message: Message to log
    """
    _library_logger().debug(message)


def log_info(message: str) -> None:
    """
    Log an info message.

    Args:
        message: Message to log
    """
    _library_logger().info(message)


def log_warning(message: str) -> None:
    """
    Log a warning message.

    Args:
        message: Message to log
    """
    _library_logger().warning(message)


def log_error(message: str) -> None:
    """
    Log an error message.

    Args:
        message: Message to log
    """
    _library_logger().error(message)
