"""
In-memory cache for the normalized "today" NEO lists.

  • One entry per (date, zone) key, e.g. "2026-02-26|America/Toronto"
  • Entries expire ttl_seconds after they were written
  • At most max_size keys are kept; the least recently used goes first
  • All access goes through a threading lock, so request threads can share it

Nothing is persisted: a cold cache after a restart is expected.
"""

import threading
import time
from collections import OrderedDict
from datetime import date
from typing import Any, Callable, Dict, Optional

DEFAULT_TTL_SECONDS = 3600.0
DEFAULT_MAX_SIZE = 10


def cache_key(day: date, zone_id: str) -> str:
    return f"{day.isoformat()}|{zone_id}"


class TodayCache:
    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_size: int = DEFAULT_MAX_SIZE,
        timer: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_size <= 0:
            raise ValueError("max_size must be positive")

        self.ttl_seconds = ttl_seconds
        self.max_size = max_size
        self._timer = timer
        self._store: "OrderedDict[str, tuple[float, Any]]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None if absent or expired."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                self._misses += 1
                return None

            written_at, value = entry
            if self._timer() - written_at >= self.ttl_seconds:
                del self._store[key]
                self._misses += 1
                return None

            self._store.move_to_end(key)
            self._hits += 1
            return value

    def put(self, key: str, value: Any) -> None:
        with self._lock:
            self._store[key] = (self._timer(), value)
            self._store.move_to_end(key)
            while len(self._store) > self.max_size:
                self._store.popitem(last=False)
                self._evictions += 1

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "size": len(self._store),
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }
