# src/api/models.py — v1
"""API-level models: ImageInput and AnalysisReport."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, field_validator

from facetier.core.models import FaceAnalysis, MedicalRecommendation, Provenance


class ImageInput(BaseModel):
    """Encoded image supplied by the caller (already captured and resized)."""

    content: bytes | Path
    filename: str = "image.jpg"

    @field_validator("content", mode="before")
    @classmethod
    def _str_is_path(cls, v: object) -> object:
        return Path(v) if isinstance(v, str) else v

    def read_bytes(self) -> bytes:
        if isinstance(self.content, Path):
            return self.content.read_bytes()
        return self.content


class AnalysisReport(BaseModel):
    """Return value of facade.analyze()."""

    face: FaceAnalysis
    medical: MedicalRecommendation | None = None
    history_id: int | None = None

    @property
    def degraded(self) -> bool:
        """True when any part came from the simulated tier."""
        parts = [self.face] + ([self.medical] if self.medical else [])
        return any(p.provenance is Provenance.SIMULATED for p in parts)
