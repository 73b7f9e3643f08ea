# src/resolver/factory.py — v1
"""Wire a ResultResolver from settings and an open storage handle."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from facetier.analysis.local_engine import LocalHeuristicEngine
from facetier.analysis.simulated import SimulatedGenerator
from facetier.cache.cache_factory import create_cache_store
from facetier.config.settings import Settings
from facetier.detection.detector_factory import create_face_detector
from facetier.llm.client_factory import create_inference_client
from facetier.network.connectivity import ConnectivityOracle
from facetier.resolver.resolver import ResultResolver

if TYPE_CHECKING:
    from facetier.storage.database import Database

logger = logging.getLogger(__name__)


def create_resolver(
    settings: Settings | None = None,
    database: Database | None = None,
) -> ResultResolver:
    """Build the production resolver.

    Args:
        settings: Application settings. Loaded from .env if None.
        database: Open storage handle (required for CACHE_BACKEND=sqlite).
    """
    settings = settings or Settings()

    detector = create_face_detector(settings)
    local_engine = LocalHeuristicEngine(detector) if detector is not None else None
    if local_engine is None:
        logger.info("No local face detector configured; offline face analysis is simulated")

    return ResultResolver(
        cache=create_cache_store(settings, database),
        connectivity=ConnectivityOracle(),
        remote=create_inference_client(settings),
        local_engine=local_engine,
        simulator=SimulatedGenerator(seed=settings.simulated_seed),
        cache_ttl=timedelta(days=settings.cache_ttl_days),
    )
