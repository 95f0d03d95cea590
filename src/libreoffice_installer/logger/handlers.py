"""Handler creation and management for the logging system.

- Console handler with hybrid formatting
- Rotating file handler
- Root logger setup with a QueueListener so async code never blocks on
  handler I/O
"""

import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path

from libreoffice_installer.constants import (
    LOG_BACKUP_COUNT,
    LOG_CONSOLE_DATE_FORMAT,
    LOG_CONSOLE_FORMAT,
    LOG_FILE_DATE_FORMAT,
    LOG_FILE_FORMAT,
    LOG_ROTATION_THRESHOLD_BYTES,
    LOGGER_ROOT_NAME,
)
from libreoffice_installer.exceptions import ConfigurationError
from libreoffice_installer.logger.formatters import HybridConsoleFormatter


def _create_console_handler(console_level: str) -> logging.StreamHandler:
    """Create console handler with hybrid formatting.

    Args:
        console_level: Log level for console (e.g., "DEBUG", "INFO")

    Returns:
        Configured StreamHandler for stdout

    """
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        HybridConsoleFormatter(
            LOG_CONSOLE_FORMAT,
            datefmt=LOG_CONSOLE_DATE_FORMAT,
        )
    )
    console_handler.setLevel(getattr(logging, console_level, logging.INFO))
    return console_handler


def _create_file_handler(
    log_file: Path, file_level: str
) -> RotatingFileHandler:
    """Create rotating file handler.

    Args:
        log_file: Path to log file
        file_level: Log level for file (e.g., "DEBUG", "INFO")

    Returns:
        Configured RotatingFileHandler

    Raises:
        ConfigurationError: If the log directory or file is not writable

    """
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=LOG_ROTATION_THRESHOLD_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        msg = f"failed to setup file logging: {e}"
        raise ConfigurationError(msg, target=str(log_file)) from e

    file_handler.setFormatter(
        logging.Formatter(LOG_FILE_FORMAT, datefmt=LOG_FILE_DATE_FORMAT)
    )
    file_handler.setLevel(getattr(logging, file_level, logging.INFO))
    return file_handler


def stop_listener(state) -> None:
    """Stop the active QueueListener, if any."""
    if state.queue_listener is not None:
        state.queue_listener.stop()
        state.queue_listener = None
    state.log_queue = None


def setup_root_logger(
    state,
    console_level: str,
    file_level: str,
    log_file: Path | None,
) -> None:
    """Initialize root logger with handlers served by a QueueListener.

    Handlers are built before anything is torn down so a failing file
    handler leaves the previous configuration in place.

    Args:
        state: Logger state object (from logger.state module)
        console_level: Console log level
        file_level: File log level
        log_file: Path to log file, or None for console-only logging

    Raises:
        ConfigurationError: If handler setup fails

    """
    handlers: list[logging.Handler] = [
        _create_console_handler(console_level)
    ]
    if log_file is not None:
        handlers.append(_create_file_handler(log_file, file_level))

    root_logger = logging.getLogger(LOGGER_ROOT_NAME)
    root_logger.setLevel(logging.DEBUG)  # Capture all, filter at handlers
    root_logger.propagate = False

    stop_listener(state)
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    state.log_queue = queue.Queue(-1)
    state.queue_listener = QueueListener(
        state.log_queue,
        *handlers,
        respect_handler_level=True,
    )
    state.queue_listener.start()
    root_logger.addHandler(QueueHandler(state.log_queue))
