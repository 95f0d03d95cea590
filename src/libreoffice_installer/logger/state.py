"""Logger state shared by the logging setup functions."""

import queue
import threading
from dataclasses import dataclass, field
from logging.handlers import QueueListener


@dataclass
class _LoggerState:
    """Queue and listener serving the ``libreoffice_installer`` logger.

    The listener doubles as the initialization marker: logging is set up
    exactly while a listener is running.
    """

    lock: threading.Lock = field(default_factory=threading.Lock)
    queue_listener: QueueListener | None = None
    log_queue: queue.Queue | None = None

    @property
    def initialized(self) -> bool:
        return self.queue_listener is not None


_state = _LoggerState()


def get_state() -> _LoggerState:
    """Get the process-wide logger state."""
    return _state
