"""In-memory ring buffer of recent log records, served by /api/logs."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import asdict, dataclass
from datetime import datetime, timezone

# Provider fallbacks and cache misses are logged below the root logger
PACKAGE_LOGGER = "icehub"


@dataclass(frozen=True)
class LogEntry:
    timestamp: str
    level: str
    logger: str
    message: str


class BufferHandler(logging.Handler):
    """Keeps the last *maxlen* log records for the logs endpoint."""

    def __init__(self, maxlen: int = 200) -> None:
        super().__init__()
        self._buffer: deque[LogEntry] = deque(maxlen=maxlen)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            created = datetime.fromtimestamp(record.created, tz=timezone.utc)
            self._buffer.append(
                LogEntry(
                    timestamp=created.isoformat(timespec="seconds"),
                    level=record.levelname,
                    logger=record.name,
                    message=self.format(record),
                )
            )
        except Exception:
            self.handleError(record)

    def entries(self, limit: int = 100, min_level: int = logging.NOTSET) -> list[dict]:
        """Return up to *limit* entries at or above *min_level*, newest first."""
        items = [
            entry
            for entry in self._buffer
            if logging.getLevelName(entry.level) >= min_level
        ][-limit:]
        items.reverse()
        return [asdict(entry) for entry in items]

    def clear(self) -> None:
        self._buffer.clear()


_handler: BufferHandler | None = None


def get_buffer_handler() -> BufferHandler:
    global _handler
    if _handler is None:
        _handler = BufferHandler(maxlen=200)
        _handler.setFormatter(logging.Formatter("%(message)s"))
        _handler.setLevel(logging.DEBUG)
    return _handler


def install_buffer_handler(level: int = logging.INFO) -> BufferHandler:
    """Attach the buffer handler to the package logger (all icehub.* modules)."""
    handler = get_buffer_handler()
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if handler not in package_logger.handlers:
        package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return handler
