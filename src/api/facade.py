# src/api/facade.py — v1
"""Public API facade: single entry point for face analysis.

Usage:
    from facetier.api.facade import analyze
    report = await analyze(image_bytes)

Runs the face analysis, derives the medical recommendation from it, and
records both in the history store. Resolution itself never fails; only
reading the input or writing history can raise.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from facetier.api.models import AnalysisReport, ImageInput
from facetier.cache.fingerprint import content_hash
from facetier.cache.models import utc_now
from facetier.config.settings import Settings
from facetier.storage.database import Database
from facetier.storage.models import HistoryRecord

if TYPE_CHECKING:
    from facetier.resolver.resolver import ResultResolver
    from facetier.storage.history_store import SqliteHistoryStore

logger = logging.getLogger(__name__)


def open_database(settings: Settings | None = None) -> Database:
    """Open the storage handle configured in settings."""
    settings = settings or Settings()
    return Database(settings.resolved_database_path)


async def analyze(
    image: bytes | ImageInput,
    settings: Settings | None = None,
    resolver: ResultResolver | None = None,
    history: SqliteHistoryStore | None = None,
    include_medical: bool = True,
) -> AnalysisReport:
    """Analyze a face image end-to-end.

    Args:
        image: Encoded image bytes or an ImageInput.
        settings: Global settings. Loaded from .env if None.
        resolver: Pre-built resolver. When None, one is built over a database
            opened for this call and closed afterwards.
        history: History store to record the result in. None = no history,
            unless the resolver is built here and HISTORY_ENABLED is set.
        include_medical: Also resolve the medical recommendation.

    Returns:
        AnalysisReport with the face result, optional medical result and the
        history row id.
    """
    data = image.read_bytes() if isinstance(image, ImageInput) else image
    if not data:
        raise ValueError("Image content is empty")

    if resolver is not None:
        return await _analyze_with(data, resolver, history, include_medical)

    from facetier.resolver.factory import create_resolver
    from facetier.storage.history_store import SqliteHistoryStore

    settings = settings or Settings()
    with open_database(settings) as database:
        owned_resolver = create_resolver(settings, database)
        if history is None and settings.history_enabled:
            history = SqliteHistoryStore(database)
        return await _analyze_with(data, owned_resolver, history, include_medical)


async def _analyze_with(
    data: bytes,
    resolver: ResultResolver,
    history: SqliteHistoryStore | None,
    include_medical: bool,
) -> AnalysisReport:
    face = await resolver.analyze_face(data)
    medical = await resolver.recommend_medical(face) if include_medical else None

    history_id = None
    if history is not None:
        history_id = await history.insert(
            HistoryRecord(
                created_at=utc_now(),
                image_sha256=content_hash(data),
                face=face,
                medical=medical,
            )
        )

    logger.info(
        "Analysis complete: score=%.1f face=%s medical=%s",
        face.attractiveness_score,
        face.provenance.value,
        medical.provenance.value if medical else "-",
    )
    return AnalysisReport(face=face, medical=medical, history_id=history_id)
