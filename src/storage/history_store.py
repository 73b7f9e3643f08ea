# src/storage/history_store.py — v1
"""SQLite analysis history, written by callers after a resolution.

Independent of the cache table; shares only the storage handle.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from datetime import datetime, time, timedelta
from typing import Callable

from facetier.cache.models import format_timestamp, parse_timestamp, utc_now
from facetier.core.models import FaceAnalysis, MedicalRecommendation
from facetier.storage.database import Database
from facetier.storage.models import HistoryRecord

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS analysis_history (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    attractivenessScore REAL NOT NULL,
    bestAngle TEXT NOT NULL,
    provenance TEXT NOT NULL,
    imageSha256 TEXT NOT NULL,
    faceJson TEXT NOT NULL,
    medicalJson TEXT,
    createdAt TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_history_created_at ON analysis_history(createdAt);
"""

_COLUMNS = "id, faceJson, medicalJson, imageSha256, createdAt"


class SqliteHistoryStore:
    """CRUD over the analysis_history table."""

    def __init__(self, database: Database, clock: Callable[[], datetime] = utc_now) -> None:
        self._db = database
        self._clock = clock
        self._db.executescript(_SCHEMA)

    async def insert(self, record: HistoryRecord) -> int:
        row_id = await asyncio.to_thread(
            self._db.insert,
            """INSERT INTO analysis_history
               (attractivenessScore, bestAngle, provenance, imageSha256,
                faceJson, medicalJson, createdAt)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            _row_values(record),
        )
        logger.debug("Stored history record %d", row_id)
        return row_id

    async def update(self, record: HistoryRecord) -> int:
        if record.id is None:
            raise ValueError("Cannot update a history record without an id")
        return await asyncio.to_thread(
            self._db.execute,
            """UPDATE analysis_history SET
               attractivenessScore = ?, bestAngle = ?, provenance = ?, imageSha256 = ?,
               faceJson = ?, medicalJson = ?, createdAt = ?
               WHERE id = ?""",
            (*_row_values(record), record.id),
        )

    async def get(self, record_id: int) -> HistoryRecord | None:
        row = await asyncio.to_thread(
            self._db.fetchone,
            f"SELECT {_COLUMNS} FROM analysis_history WHERE id = ?",
            (record_id,),
        )
        return None if row is None else _to_record(row)

    async def get_today(self) -> HistoryRecord | None:
        """Latest record created today (UTC day of the store's clock)."""
        now = self._clock()
        start = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)
        end = start + timedelta(days=1)
        row = await asyncio.to_thread(
            self._db.fetchone,
            f"""SELECT {_COLUMNS} FROM analysis_history
                WHERE createdAt >= ? AND createdAt < ?
                ORDER BY createdAt DESC LIMIT 1""",
            (format_timestamp(start), format_timestamp(end)),
        )
        return None if row is None else _to_record(row)

    async def list_all(self, limit: int | None = None) -> list[HistoryRecord]:
        """All records, newest first."""
        sql = f"SELECT {_COLUMNS} FROM analysis_history ORDER BY createdAt DESC, id DESC"
        params: tuple[int, ...] = ()
        if limit is not None:
            sql += " LIMIT ?"
            params = (limit,)
        rows = await asyncio.to_thread(self._db.fetchall, sql, params)
        return [_to_record(row) for row in rows]

    async def delete(self, record_id: int) -> int:
        return await asyncio.to_thread(
            self._db.execute, "DELETE FROM analysis_history WHERE id = ?", (record_id,)
        )

    async def delete_all(self) -> int:
        return await asyncio.to_thread(self._db.execute, "DELETE FROM analysis_history")

    async def count(self) -> int:
        row = await asyncio.to_thread(
            self._db.fetchone, "SELECT COUNT(*) AS n FROM analysis_history"
        )
        return int(row["n"]) if row is not None else 0


def _row_values(record: HistoryRecord) -> tuple[object, ...]:
    face = record.face
    return (
        face.attractiveness_score,
        face.best_angle.value,
        face.provenance.value,
        record.image_sha256,
        face.model_dump_json(by_alias=True),
        record.medical.model_dump_json(by_alias=True) if record.medical else None,
        format_timestamp(record.created_at),
    )


def _to_record(row: sqlite3.Row) -> HistoryRecord:
    medical_json = row["medicalJson"]
    return HistoryRecord(
        id=row["id"],
        created_at=parse_timestamp(row["createdAt"]),
        image_sha256=row["imageSha256"],
        face=FaceAnalysis.model_validate_json(row["faceJson"]),
        medical=(
            MedicalRecommendation.model_validate_json(medical_json)
            if medical_json else None
        ),
    )
