"""
digital_bhutan.services.log_buffer — In-Memory Log Tail for the Admin Console
==============================================================================

A thread-safe ring buffer plugged into Python's ``logging`` framework.
The admin API reads it with :func:`get_logs` and adjusts the capture
level with :func:`set_capture_level`.

One buffer per API process; nothing is persisted.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

DEFAULT_CAPACITY = 2000
VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_buffer: LogBuffer | None = None
_lock = threading.Lock()


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One captured log record."""

    timestamp: str
    level: str
    logger: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


class LogBuffer:
    """Bounded, lock-protected :class:`collections.deque` of entries."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        self._entries: deque[LogEntry] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def append(self, entry: LogEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def get_entries(
        self,
        tail: int = 200,
        level: str | None = None,
        logger_filter: str | None = None,
    ) -> list[dict[str, str]]:
        """Return the most recent *tail* entries at or above *level*.

        *logger_filter* is a logger-name prefix, so ``digital_bhutan.services``
        matches every service module.
        """
        min_level = logging.getLevelName(level.upper()) if level else 0
        if not isinstance(min_level, int):
            min_level = 0

        with self._lock:
            snapshot = list(self._entries)

        results = [
            entry.to_dict()
            for entry in snapshot
            if logging.getLevelName(entry.level) >= min_level
            and (not logger_filter or entry.logger.startswith(logger_filter))
        ]
        if tail and len(results) > tail:
            results = results[-tail:]
        return results

    @property
    def size(self) -> int:
        with self._lock:
            return len(self._entries)


class RingBufferHandler(logging.Handler):
    """Logging handler that appends records to a :class:`LogBuffer`."""

    def __init__(self, buffer: LogBuffer, level: int = logging.DEBUG) -> None:
        super().__init__(level)
        self._buffer = buffer

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._buffer.append(LogEntry(
                timestamp=datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
                level=record.levelname,
                logger=record.name,
                message=self.format(record),
            ))
        except Exception:
            self.handleError(record)


# ---------------------------------------------------------------------------
# Process-global access
# ---------------------------------------------------------------------------
def get_buffer() -> LogBuffer:
    """Return (or create) the process-global log buffer."""
    global _buffer
    if _buffer is None:
        with _lock:
            if _buffer is None:
                _buffer = LogBuffer()
    return _buffer


def _installed_handler() -> RingBufferHandler | None:
    for h in logging.getLogger().handlers:
        if isinstance(h, RingBufferHandler):
            return h
    return None


def install_handler(level: int = logging.INFO) -> RingBufferHandler:
    """Attach the ring-buffer handler to the root logger (once).

    Uvicorn's loggers are switched to propagate so request logs land in
    the buffer too.
    """
    handler = _installed_handler()
    if handler is not None:
        return handler

    handler = RingBufferHandler(get_buffer(), level=level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logging.getLogger().addHandler(handler)

    for logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        log = logging.getLogger(logger_name)
        log.propagate = True
        log.setLevel(logging.INFO)

    return handler


def get_logs(
    tail: int = 200,
    level: str | None = None,
    logger_filter: str | None = None,
) -> list[dict[str, str]]:
    return get_buffer().get_entries(tail=tail, level=level, logger_filter=logger_filter)


def get_current_level() -> str:
    """The minimum level currently captured into the buffer."""
    handler = _installed_handler()
    if handler is not None:
        return logging.getLevelName(handler.level)
    return logging.getLevelName(logging.getLogger().level)


def set_capture_level(level_name: str) -> str:
    """Change the ring-buffer handler's minimum level on the fly.

    Raises :class:`ValueError` for names outside :data:`VALID_LEVELS`.
    """
    level_name = level_name.upper()
    if level_name not in VALID_LEVELS:
        raise ValueError(f"Invalid level: {level_name}. Must be one of {VALID_LEVELS}")

    numeric = getattr(logging, level_name)
    handler = _installed_handler()
    if handler is None:
        install_handler(level=numeric)
    else:
        handler.setLevel(numeric)
    return level_name
