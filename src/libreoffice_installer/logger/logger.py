"""Public logging API.

- setup_logging(): (Re)configure the queue-based root logger
- get_logger(): Get a child logger, bootstrapping console logging
- flush_all_handlers(): Drain the queue and flush handler buffers
- clear_logger_state(): Reset everything for test isolation
"""

import atexit
import contextlib
import logging
import time
from pathlib import Path

from libreoffice_installer.constants import (
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    LOGGER_ROOT_NAME,
)
from libreoffice_installer.logger.handlers import (
    setup_root_logger,
    stop_listener,
)
from libreoffice_installer.logger.state import get_state

FLUSH_TIMEOUT_SECONDS = 5.0


def flush_all_handlers() -> None:
    """Wait for queued records and flush every listener handler.

    Safe to call from any thread. The listener does not use
    ``task_done()``, so the queue is polled until empty.
    """
    state = get_state()
    if state.queue_listener is None or state.log_queue is None:
        return

    start_time = time.time()
    while not state.log_queue.empty():
        if time.time() - start_time > FLUSH_TIMEOUT_SECONDS:
            break
        time.sleep(0.01)

    # Listener may still be writing the last dequeued record
    time.sleep(0.1)

    for handler in state.queue_listener.handlers:
        with contextlib.suppress(OSError, ValueError):
            handler.flush()


def _cleanup_logging() -> None:
    """Stop the QueueListener on interpreter exit."""
    state = get_state()
    if state.queue_listener is not None:
        flush_all_handlers()
        stop_listener(state)


atexit.register(_cleanup_logging)


def setup_logging(
    console_level: str | None = None,
    file_level: str | None = None,
    log_file: Path | None = None,
) -> logging.Logger:
    """Configure the root logger, replacing any earlier configuration.

    Called once the settings file has been read. Before that,
    ``get_logger`` has already installed a console-only setup.

    Args:
        console_level: Console log level ("DEBUG", "INFO", "WARNING")
        file_level: File log level
        log_file: Path to log file; None disables file logging

    Returns:
        The ``libreoffice_installer`` root logger

    Raises:
        ConfigurationError: If file logging setup fails

    """
    state = get_state()
    with state.lock:
        setup_root_logger(
            state,
            console_level or DEFAULT_CONSOLE_LOG_LEVEL,
            file_level or DEFAULT_LOG_LEVEL,
            log_file,
        )
    return logging.getLogger(LOGGER_ROOT_NAME)


def get_logger(name: str = LOGGER_ROOT_NAME) -> logging.Logger:
    """Get a logger, initializing console logging on first use.

    Use ``__name__`` so records propagate to the package root:
        >>> logger = get_logger(__name__)

    """
    state = get_state()
    with state.lock:
        if not state.initialized:
            setup_root_logger(
                state, DEFAULT_CONSOLE_LOG_LEVEL, DEFAULT_LOG_LEVEL, None
            )
    return logging.getLogger(name)


def clear_logger_state() -> None:
    """Clear global logger state for testing purposes.

    Stops the listener and closes the handlers of every logger under
    the ``libreoffice_installer`` namespace. Not for production use.
    """
    state = get_state()
    with state.lock:
        if state.queue_listener is not None:
            flush_all_handlers()
        stop_listener(state)

        for logger_name in list(logging.Logger.manager.loggerDict.keys()):
            if logger_name.startswith(LOGGER_ROOT_NAME):
                log_instance = logging.getLogger(logger_name)
                for handler in log_instance.handlers[:]:
                    handler.close()
                    log_instance.removeHandler(handler)
