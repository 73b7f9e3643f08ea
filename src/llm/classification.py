# src/llm/classification.py — v1
"""Classify non-2xx remote responses into fallback error classes."""

from __future__ import annotations

import json
from typing import Any

from facetier.llm.models import ErrorClass

QUOTA_STATUS = 429
QUOTA_ERROR_MARKERS = frozenset({"insufficient_quota", "rate_limit_exceeded"})


def classify_http_failure(status_code: int, body: str | bytes | dict | None) -> ErrorClass:
    """Classify a failed HTTP response.

    429 is always a quota error. Otherwise the body's ``error.type`` and
    ``error.code`` are checked for quota markers; anything else, including an
    unparseable body, is transient.
    """
    if status_code == QUOTA_STATUS:
        return ErrorClass.QUOTA
    error = _error_object(body)
    if error is not None:
        for field in ("type", "code"):
            if error.get(field) in QUOTA_ERROR_MARKERS:
                return ErrorClass.QUOTA
    return ErrorClass.TRANSIENT


def _error_object(body: str | bytes | dict | None) -> dict[str, Any] | None:
    data: Any = body
    if isinstance(body, (str, bytes)):
        try:
            data = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None
    if not isinstance(data, dict):
        return None
    # The SDK sometimes hands over the inner error object directly.
    error = data.get("error", data)
    return error if isinstance(error, dict) else None
