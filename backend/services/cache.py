"""Simple in-memory TTL cache. No Redis needed.

Entries expire lazily: a stale entry is deleted by the read that finds it,
there is no background sweep. One instance is created per app (see
``create_app``) and shared by every request on that worker. Each uvicorn
worker has its own cache, so with several workers a query may be fetched
once per worker.
"""

import time
from typing import Any, Callable, NamedTuple

DEFAULT_TTL_SECONDS = 30 * 60


class CacheEntry(NamedTuple):
    key: str
    payload: Any
    stored_at: float


class TTLCache:
    def __init__(self, ttl_seconds: float = DEFAULT_TTL_SECONDS, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._store: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Any | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at < self.ttl_seconds:
            return entry.payload
        del self._store[key]
        return None

    def set(self, key: str, payload: Any) -> None:
        self._store[key] = CacheEntry(key, payload, self._clock())

    def __contains__(self, key: str) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)
