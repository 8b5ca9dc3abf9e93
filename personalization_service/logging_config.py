"""
Logging Configuration Module

Queue-based logging setup for the personalization service, plus a bounded
in-memory buffer of recent records that the admin API can display.
"""

import logging
import logging.handlers
import sys
from collections import deque
from datetime import datetime
from queue import Queue
from threading import Lock
from typing import Any, Dict, List, Optional

DEFAULT_RECENT_LOG_LIMIT = 200


class RecentLogHandler(logging.Handler):
    """Keeps the newest records in memory, newest first."""

    def __init__(self, limit: int = DEFAULT_RECENT_LOG_LIMIT, level: int = logging.WARNING):
        super().__init__(level=level)
        self.limit = max(1, limit)
        self._entries: deque = deque(maxlen=self.limit)
        self._entries_lock = Lock()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = {
                "time": datetime.fromtimestamp(record.created).isoformat(timespec="seconds"),
                "level": record.levelname.lower(),
                "logger": record.name,
                "message": record.getMessage(),
                "context": getattr(record, "context", None) or {},
            }
        except Exception:
            self.handleError(record)
            return
        with self._entries_lock:
            self._entries.appendleft(entry)

    def get_recent(self, limit: int = 50) -> List[Dict[str, Any]]:
        with self._entries_lock:
            return list(self._entries)[:max(0, limit)]

    def clear(self) -> None:
        with self._entries_lock:
            self._entries.clear()


def install_recent_log_handler(handler: RecentLogHandler) -> RecentLogHandler:
    """Attach the handler to the root logger, replacing any previous one."""
    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if isinstance(existing, RecentLogHandler):
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    return handler


class ThreadSafeLoggingConfig:
    """Thread-safe logging configuration with queue-based logging."""

    def __init__(self):
        self._log_listener: Optional[logging.handlers.QueueListener] = None
        self._log_queue: Optional[Queue] = None

    def setup_logging(self, debug: bool = False) -> None:
        """
        Configure queue-based logging for the service and silence chatty libraries.

        Request threads write to a queue and a single listener thread formats
        the records, so lines from concurrent requests never interleave.

        Args:
            debug: Whether to enable debug logging
        """
        self.stop()
        self._log_queue = Queue()

        queue_handler = logging.handlers.QueueHandler(self._log_queue)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s")
        )

        self._log_listener = logging.handlers.QueueListener(
            self._log_queue, console_handler, respect_handler_level=True
        )
        self._log_listener.start()

        root_logger = logging.getLogger()
        for handler in list(root_logger.handlers):
            # The recent-log buffer survives reconfiguration.
            if not isinstance(handler, RecentLogHandler):
                root_logger.removeHandler(handler)
        root_logger.addHandler(queue_handler)
        root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

        if not debug:
            self._silence_noisy_libraries()

    def _silence_noisy_libraries(self) -> None:
        """Silence noisy third-party libraries."""
        noisy_loggers = [
            "werkzeug",
            "urllib3",
            "markdown",
            "asyncio",
        ]

        for name in noisy_loggers:
            logging.getLogger(name).setLevel(logging.WARNING)

    def stop(self) -> None:
        """Stop the logging listener and cleanup."""
        if self._log_listener:
            self._log_listener.stop()
            self._log_listener = None
        if self._log_queue:
            self._log_queue = None


# Global logging configuration instance
logging_config = ThreadSafeLoggingConfig()


def setup_logging(debug: bool = False) -> None:
    """
    Setup thread-safe logging configuration.

    Args:
        debug: Whether to enable debug logging
    """
    logging_config.setup_logging(debug)


def stop_logging() -> None:
    """Stop the logging listener and cleanup."""
    logging_config.stop()


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name.

    Args:
        name: Logger name

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
