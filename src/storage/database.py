# src/storage/database.py — v1
"""Explicit SQLite storage handle shared by the cache and history stores.

Opened once at startup and passed to the stores that need it. A single
connection is used for the process lifetime; every statement runs under one
lock so concurrent readers and writers are serialized at this layer.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from pathlib import Path
from typing import Any, Sequence

logger = logging.getLogger(__name__)

MEMORY = ":memory:"


class Database:
    """Thread-safe wrapper around one sqlite3 connection."""

    def __init__(self, path: Path | str = MEMORY) -> None:
        if str(path) == MEMORY:
            self._path = MEMORY
        else:
            db_path = Path(path).expanduser()
            db_path.parent.mkdir(parents=True, exist_ok=True)
            self._path = str(db_path)
        self._lock = threading.Lock()
        self._conn: sqlite3.Connection | None = sqlite3.connect(
            self._path, check_same_thread=False
        )
        self._conn.row_factory = sqlite3.Row
        if self._path != MEMORY:
            self._conn.execute("PRAGMA journal_mode=WAL")
        logger.debug("Opened database %s", self._path)

    @property
    def path(self) -> str:
        return self._path

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a write statement and commit. Returns the affected row count."""
        with self._lock:
            conn = self._connection()
            cursor = conn.execute(sql, params)
            conn.commit()
            return cursor.rowcount

    def insert(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run an INSERT and commit. Returns the new row id."""
        with self._lock:
            conn = self._connection()
            cursor = conn.execute(sql, params)
            conn.commit()
            return int(cursor.lastrowid)

    def executescript(self, script: str) -> None:
        with self._lock:
            self._connection().executescript(script)

    def fetchone(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Row | None:
        with self._lock:
            return self._connection().execute(sql, params).fetchone()

    def fetchall(self, sql: str, params: Sequence[Any] = ()) -> list[sqlite3.Row]:
        with self._lock:
            return self._connection().execute(sql, params).fetchall()

    def close(self) -> None:
        """Close the connection. Safe to call twice."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                logger.debug("Closed database %s", self._path)

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise sqlite3.ProgrammingError("Database handle is closed")
        return self._conn

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
