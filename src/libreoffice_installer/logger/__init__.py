"""Logging for libreoffice-installer.

Architecture:
    All modules log through child loggers of ``libreoffice_installer``.
    The package root logger owns a single QueueHandler. A QueueListener
    thread drains the queue into the console and rotating file handlers.

Rules:
    - Get loggers with ``get_logger(__name__)``.
    - Use %-style arguments, never f-strings, in log calls.
    - Call ``flush_all_handlers()`` before reading the log file.
"""

from libreoffice_installer.logger.formatters import (
    ColoredConsoleFormatter,
    HybridConsoleFormatter,
)
from libreoffice_installer.logger.logger import (
    clear_logger_state,
    flush_all_handlers,
    get_logger,
    setup_logging,
)
from libreoffice_installer.logger.state import get_state

__all__ = [
    "ColoredConsoleFormatter",
    "HybridConsoleFormatter",
    "clear_logger_state",
    "flush_all_handlers",
    "get_logger",
    "get_state",
    "setup_logging",
]
