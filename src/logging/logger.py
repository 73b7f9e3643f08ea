# src/logging/logger.py — v1
"""Logger setup with JSON and text formatters.

Modules log through ``logging.getLogger(__name__)``; everything lives under
the ``facetier`` logger, which ``setup_logging`` configures once at startup.
JSON lines carry the resolution context (request_id, kind, tier) as
top-level keys so a single resolution can be filtered with one query.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from facetier.logging.context import get_context

ROOT_LOGGER = "facetier"

# Chatty third-party loggers; the openai SDK logs every request via httpx.
_QUIET_LOGGERS = ("httpx", "httpcore", "openai")


def _utc_timestamp(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": _utc_timestamp(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            **get_context().as_dict(),
        }
        data = getattr(record, "data", None)
        if data:
            entry["data"] = data
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """``HH:MM:SS LEVEL logger [request_id/tier] message`` for the CLI."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_context()
        tag = "/".join(v for v in (ctx.request_id, ctx.tier) if v)
        line = "{ts} {level:<7} {name}{tag} {msg}".format(
            ts=_utc_timestamp(record).strftime("%H:%M:%S"),
            level=record.levelname,
            name=record.name,
            tag=f" [{tag}]" if tag else "",
            msg=record.getMessage(),
        )
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the facetier namespace."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def _build_formatter(log_format: str) -> logging.Formatter:
    return JsonFormatter() if log_format == "json" else TextFormatter()


def setup_logging(
    level: str = "INFO",
    log_format: str = "text",
    log_file: str | Path | None = None,
    rotation: str = "10MB",
    retention: int = 5,
) -> None:
    """(Re)configure the facetier logger; safe to call more than once.

    Args:
        level: DEBUG, INFO, WARNING or ERROR.
        log_format: "json" or "text".
        log_file: Also write to this file, rotated by size. None = stderr only.
        rotation: Size that triggers rotation, e.g. "10MB".
        retention: Rotated files kept.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(logging.getLevelName(level.upper()) if level else logging.INFO)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        from facetier.logging.handlers import create_rotating_handler

        handlers.append(create_rotating_handler(log_file, rotation, retention))

    formatter = _build_formatter(log_format)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
