# src/cache/memory_store.py — v1
"""In-memory cache store (CACHE_BACKEND=memory).

Same TTL and upsert semantics as the SQLite store, without persistence.
Used in tests and for throwaway CLI sessions.
"""

from __future__ import annotations

import threading
from datetime import datetime, timedelta
from typing import Callable

from facetier.cache.base_cache_store import BaseCacheStore
from facetier.cache.models import DEFAULT_TTL, CacheEntry, utc_now


class MemoryCacheStore(BaseCacheStore):
    """Dict-backed cache store."""

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    async def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._entries.get(key)
        if entry is None or not entry.is_live(self._clock()):
            return None
        return entry.payload

    async def put(self, key: str, payload: str, ttl: timedelta = DEFAULT_TTL) -> None:
        entry = CacheEntry.create(key, payload, self._clock(), ttl)
        with self._lock:
            self._entries[key] = entry

    async def purge(self, now: datetime | None = None) -> int:
        cutoff = now or self._clock()
        with self._lock:
            expired = [k for k, e in self._entries.items() if e.expires_at < cutoff]
            for k in expired:
                del self._entries[k]
        return len(expired)

    async def clear(self) -> int:
        with self._lock:
            removed = len(self._entries)
            self._entries.clear()
        return removed

    async def count(self) -> int:
        with self._lock:
            return len(self._entries)
