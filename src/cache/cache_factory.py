# src/cache/cache_factory.py — v1
"""Factory for cache store instantiation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from facetier.cache.base_cache_store import BaseCacheStore
from facetier.config.settings import Settings

if TYPE_CHECKING:
    from facetier.storage.database import Database


def create_cache_store(
    settings: Settings | None = None,
    database: Database | None = None,
) -> BaseCacheStore:
    """Instantiate the configured cache backend.

    Args:
        settings: Application settings. Defaults to the in-memory backend.
        database: Open storage handle, required for the sqlite backend.

    Returns:
        Configured BaseCacheStore implementation.
    """
    backend = "memory" if settings is None else settings.cache_backend

    if backend == "memory":
        from facetier.cache.memory_store import MemoryCacheStore
        return MemoryCacheStore()

    if backend == "sqlite":
        if database is None:
            raise ValueError("CACHE_BACKEND=sqlite requires an open Database handle")
        from facetier.cache.sqlite_store import SqliteCacheStore
        return SqliteCacheStore(database)

    raise ValueError(f"Unsupported cache backend: {backend!r}")
