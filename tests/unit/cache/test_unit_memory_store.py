# tests/unit/cache/test_unit_memory_store.py — v1
"""Tests for cache/memory_store.py."""

from __future__ import annotations

from datetime import timedelta

import pytest


class TestMemoryCacheStore:
    @pytest.mark.asyncio
    async def test_put_and_get(self, memory_cache):
        await memory_cache.put("k", "v")
        assert await memory_cache.get("k") == "v"

    @pytest.mark.asyncio
    async def test_ttl_boundary(self, memory_cache, clock):
        await memory_cache.put("k", "v")
        clock.advance(days=29)
        assert await memory_cache.get("k") == "v"
        clock.advance(days=2)
        assert await memory_cache.get("k") is None

    @pytest.mark.asyncio
    async def test_expired_entry_counted_until_purged(self, memory_cache, clock):
        await memory_cache.put("k", "v", ttl=timedelta(minutes=5))
        clock.advance(minutes=10)
        assert await memory_cache.count() == 1
        assert await memory_cache.purge() == 1
        assert await memory_cache.count() == 0

    @pytest.mark.asyncio
    async def test_upsert(self, memory_cache):
        await memory_cache.put("k", "a")
        await memory_cache.put("k", "b")
        assert await memory_cache.get("k") == "b"
        assert await memory_cache.count() == 1

    @pytest.mark.asyncio
    async def test_clear(self, memory_cache):
        await memory_cache.put("a", "1")
        await memory_cache.put("b", "2")
        assert await memory_cache.clear() == 2
        assert await memory_cache.get("a") is None
