# src/logging/handlers.py — v1
"""Size-rotating file handler for the facetier log file."""

from __future__ import annotations

import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

_SIZE_PATTERN = re.compile(r"^(\d+)\s*([KMG]?B)?$", re.IGNORECASE)
_UNIT_BYTES = {"B": 1, "KB": 1 << 10, "MB": 1 << 20, "GB": 1 << 30}


def parse_size(text: str) -> int:
    """'10MB' -> 10485760. A bare number is a byte count."""
    match = _SIZE_PATTERN.match(text.strip())
    if match is None:
        raise ValueError(f"Invalid log rotation size {text!r}, expected e.g. '10MB'")
    number, unit = match.groups()
    return int(number) * _UNIT_BYTES[(unit or "B").upper()]


def create_rotating_handler(
    log_file: str | Path,
    rotation: str = "10MB",
    retention: int = 5,
) -> RotatingFileHandler:
    """RotatingFileHandler on ``log_file`` (``~`` expanded, parent created)."""
    target = Path(log_file).expanduser()
    target.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        target,
        maxBytes=parse_size(rotation),
        backupCount=retention,
        encoding="utf-8",
    )
