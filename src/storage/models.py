# src/storage/models.py — v1
"""History models: one record per finished analysis."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from facetier.core.models import FaceAnalysis, MedicalRecommendation


class HistoryRecord(BaseModel):
    """A face analysis and its medical recommendation, as shown to the user."""

    id: int | None = None
    created_at: datetime
    image_sha256: str
    face: FaceAnalysis
    medical: MedicalRecommendation | None = None
