# src/cache/models.py — v1
"""Cache domain models: CacheEntry and timestamp helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel

DEFAULT_TTL = timedelta(days=30)

# Fixed width, always with microseconds, so text comparison is chronological.
_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(ts: datetime) -> str:
    """Render a datetime as a fixed-width UTC string (naive values are UTC)."""
    if ts.tzinfo is not None:
        ts = ts.astimezone(timezone.utc)
    return ts.strftime(_TIMESTAMP_FORMAT)


def parse_timestamp(text: str) -> datetime:
    return datetime.strptime(text, _TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)


class CacheEntry(BaseModel):
    """Single cache row: opaque payload keyed by content hash."""

    key: str
    payload: str
    created_at: datetime
    expires_at: datetime

    @classmethod
    def create(
        cls, key: str, payload: str, now: datetime, ttl: timedelta = DEFAULT_TTL
    ) -> CacheEntry:
        return cls(key=key, payload=payload, created_at=now, expires_at=now + ttl)

    def is_live(self, now: datetime) -> bool:
        return self.expires_at > now
