"""Logging formatters for console output.

- ColoredConsoleFormatter: Adds ANSI color codes to log levels
- HybridConsoleFormatter: Message only for INFO, structured for others
"""

import logging

from libreoffice_installer.constants import LOG_COLORS


class ColoredConsoleFormatter(logging.Formatter):
    """Console formatter with ANSI color support for log levels.

    The level name is colored only for the duration of ``format`` and
    restored afterwards, so file handlers sharing the record see the
    plain name.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with a colored level name."""
        if record.levelname in LOG_COLORS:
            color = LOG_COLORS[record.levelname]
            reset = LOG_COLORS["RESET"]

            original_levelname = record.levelname
            record.levelname = f"{color}{original_levelname}{reset}"
            try:
                return super().format(record)
            finally:
                record.levelname = original_levelname

        return super().format(record)


class HybridConsoleFormatter(logging.Formatter):
    """Console formatter with plain INFO and structured everything else.

    Example Output:
        INFO:     "LibreOffice 24.8.2 has been installed."
        WARNING:  "12:30:45 - libreoffice_installer - WARNING - ..."
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
    ) -> None:
        """Initialize hybrid formatter with structured format template.

        Args:
            fmt: Format string for non-INFO messages
            datefmt: Date format string for timestamps

        """
        super().__init__(fmt, datefmt)
        self._colored_formatter = ColoredConsoleFormatter(fmt, datefmt)

    def format(self, record: logging.LogRecord) -> str:
        """Format log record using simple or structured format by level."""
        if record.levelno == logging.INFO:
            return record.getMessage()
        return self._colored_formatter.format(record)
