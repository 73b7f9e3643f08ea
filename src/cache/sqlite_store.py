# src/cache/sqlite_store.py — v1
"""SQLite-based cache store (CACHE_BACKEND=sqlite).

Uses the shared storage handle from facetier.storage.database. Rows are
upserted by cacheKey; reads filter on expiresAt so expired rows are ignored
until purge() removes them.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from datetime import datetime, timedelta
from typing import Callable

from facetier.cache.base_cache_store import BaseCacheStore, CacheUnavailableError
from facetier.cache.models import DEFAULT_TTL, format_timestamp, utc_now
from facetier.storage.database import Database

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS api_cache (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    cacheKey TEXT UNIQUE NOT NULL,
    data TEXT NOT NULL,
    createdAt TEXT NOT NULL,
    expiresAt TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_cache_key ON api_cache(cacheKey);
CREATE INDEX IF NOT EXISTS idx_expires_at ON api_cache(expiresAt);
"""


class SqliteCacheStore(BaseCacheStore):
    """SQLite-backed content cache with TTL."""

    def __init__(
        self,
        database: Database,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._db = database
        self._clock = clock
        self._db.executescript(_SCHEMA)

    async def get(self, key: str) -> str | None:
        now = format_timestamp(self._clock())
        row = await self._run(
            self._db.fetchone,
            "SELECT data FROM api_cache WHERE cacheKey = ? AND expiresAt > ? LIMIT 1",
            (key, now),
        )
        return None if row is None else row["data"]

    async def put(self, key: str, payload: str, ttl: timedelta = DEFAULT_TTL) -> None:
        now = self._clock()
        await self._run(
            self._db.execute,
            """INSERT OR REPLACE INTO api_cache (cacheKey, data, createdAt, expiresAt)
               VALUES (?, ?, ?, ?)""",
            (key, payload, format_timestamp(now), format_timestamp(now + ttl)),
        )

    async def purge(self, now: datetime | None = None) -> int:
        cutoff = format_timestamp(now or self._clock())
        removed = await self._run(
            self._db.execute, "DELETE FROM api_cache WHERE expiresAt < ?", (cutoff,)
        )
        if removed:
            logger.info("Purged %d expired cache entries", removed)
        return removed

    async def clear(self) -> int:
        removed = await self._run(self._db.execute, "DELETE FROM api_cache")
        logger.info("Cleared %d cache entries", removed)
        return removed

    async def count(self) -> int:
        row = await self._run(self._db.fetchone, "SELECT COUNT(*) AS n FROM api_cache")
        return int(row["n"]) if row is not None else 0

    @staticmethod
    async def _run(fn, *args):  # type: ignore[no-untyped-def]
        try:
            return await asyncio.to_thread(fn, *args)
        except sqlite3.Error as e:
            raise CacheUnavailableError(str(e)) from e
