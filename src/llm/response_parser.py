# src/llm/response_parser.py — v1
"""Extract the JSON object from a chat-completion message."""

from __future__ import annotations

import json
import re
from typing import Any

_FENCE_OPEN = re.compile(r"^```[ \t]*(?:json)?[ \t]*\n?", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\n?```\s*$")


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ``` / ```json fence if present."""
    text = text.strip()
    if text.startswith("```"):
        text = _FENCE_OPEN.sub("", text, count=1)
        text = _FENCE_CLOSE.sub("", text, count=1)
    return text.strip()


def parse_json_content(content: str | None) -> Any:
    """Parse a (possibly fenced) JSON message body.

    Raises:
        ValueError: content is empty or not valid JSON.
    """
    if not content or not content.strip():
        raise ValueError("Empty message content")
    return json.loads(strip_code_fence(content))
