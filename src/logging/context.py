# src/logging/context.py — v1
"""Per-resolution logging context: request_id, kind and tier."""

from __future__ import annotations

import contextvars
from dataclasses import asdict, dataclass
from typing import Any

# Set once per resolution; the tier changes as the resolver advances.
_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_kind: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "kind", default=None
)
_tier: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "tier", default=None
)


@dataclass(frozen=True)
class LogContext:
    """Values of the context variables at one point in time."""

    request_id: str | None = None
    kind: str | None = None
    tier: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Fields that are set, for merging into a JSON log line."""
        return {k: v for k, v in asdict(self).items() if v is not None}


def get_context() -> LogContext:
    """Read the current context."""
    return LogContext(
        request_id=_request_id.get(),
        kind=_kind.get(),
        tier=_tier.get(),
    )


def set_request_context(request_id: str, kind: str) -> None:
    """Set request-level context (called once per resolution)."""
    _request_id.set(request_id)
    _kind.set(kind)


def set_tier_context(tier: str | None) -> None:
    """Set the fallback tier currently executing."""
    _tier.set(tier)


def clear_context() -> None:
    """Forget the current resolution (tests and long-lived workers)."""
    _request_id.set(None)
    _kind.set(None)
    _tier.set(None)
