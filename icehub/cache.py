"""In-memory, time-boxed cache for provider responses."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 60.0


@dataclass(frozen=True)
class CacheEntry:
    data: Any
    stored_at: float


class ResponseCache:
    """Keyed memoization of provider responses with a fixed TTL.

    Entries live for the process lifetime and are only dropped when a read
    finds them expired. There is no locking: two concurrent misses on the
    same key both fetch, and the last write wins.
    """

    def __init__(
        self,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at > self._ttl:
            del self._entries[key]
            logger.debug("Cache expired key=%s", key)
            return None
        return entry.data

    def set(self, key: str, data: Any) -> None:
        self._entries[key] = CacheEntry(data=data, stored_at=self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
