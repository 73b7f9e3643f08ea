# src/cache/base_cache_store.py — v1
"""Abstract content cache interface.

Stores know nothing about analysis semantics: keys are strings, payloads are
opaque serialized text, and liveness is decided by the entry's expiry alone.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta

from facetier.cache.models import DEFAULT_TTL


class CacheUnavailableError(Exception):
    """The cache storage failed; callers treat this as a miss."""


class BaseCacheStore(ABC):
    """Unified interface for cache storage backends."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the payload if a live entry exists (expires_at > now)."""

    @abstractmethod
    async def put(self, key: str, payload: str, ttl: timedelta = DEFAULT_TTL) -> None:
        """Upsert: replace any existing entry for key."""

    @abstractmethod
    async def purge(self, now: datetime | None = None) -> int:
        """Delete entries with expires_at < now. Returns rows removed."""

    @abstractmethod
    async def clear(self) -> int:
        """Delete every entry. Returns rows removed."""

    @abstractmethod
    async def count(self) -> int:
        """Number of stored entries, live or expired."""
