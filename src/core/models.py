# src/core/models.py — v1
"""Core domain models: requests, face analysis and medical recommendation results.

Wire names are camelCase (the remote schema and the cache payload use them);
Python attribute names are snake_case.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class AnalysisKind(str, Enum):
    FACE = "face"
    MEDICAL_RECOMMENDATION = "medical_recommendation"


class Provenance(str, Enum):
    """Which tier produced a result."""

    REMOTE = "remote"
    CACHED = "cached"
    LOCAL_HEURISTIC = "local_heuristic"
    SIMULATED = "simulated"


class BestAngle(str, Enum):
    FRONT = "Front"
    LEFT_PROFILE = "Left Profile"
    RIGHT_PROFILE = "Right Profile"
    THREE_QUARTER_LEFT = "Three-Quarter Left"
    THREE_QUARTER_RIGHT = "Three-Quarter Right"

    @classmethod
    def parse(cls, value: str) -> BestAngle:
        """Match loosely: case, spaces, hyphens and underscores are ignored."""
        wanted = _squash(value)
        for member in cls:
            if _squash(member.value) == wanted or _squash(member.name) == wanted:
                return member
        raise ValueError(f"Unknown best angle: {value!r}")


class Severity(str, Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"

    @classmethod
    def parse(cls, value: str) -> Severity:
        wanted = value.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        raise ValueError(f"Unknown severity: {value!r}")


def _squash(value: str) -> str:
    return re.sub(r"[\s_\-]+", "", value).lower()


def clamp_score(value: float) -> float:
    """Clamp a score into [0, 100]."""
    return max(0.0, min(100.0, float(value)))


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class FeatureScores(_WireModel):
    """The six named sub-scores, each 0-100."""

    symmetry: float
    skin_quality: float
    facial_structure: float
    eye_area: float
    nose: float
    lips: float

    @field_validator("*", mode="before")
    @classmethod
    def _numeric(cls, v: object) -> float:  # noqa: N805
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError(f"score must be a number, got {v!r}")
        return clamp_score(v)


class FaceAnalysis(_WireModel):
    """Structured result of a face analysis."""

    attractiveness_score: float
    best_angle: BestAngle = BestAngle.FRONT
    best_angle_description: str = ""
    features: FeatureScores = Field(alias="facialFeatures")
    overall_analysis: str = ""
    provenance: Provenance

    @field_validator("attractiveness_score", mode="before")
    @classmethod
    def _score(cls, v: object) -> float:  # noqa: N805
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError(f"attractivenessScore must be a number, got {v!r}")
        return clamp_score(v)

    @field_validator("best_angle", mode="before")
    @classmethod
    def _angle(cls, v: object) -> object:  # noqa: N805
        if isinstance(v, str):
            return BestAngle.parse(v)
        return v


class MedicalRecommendation(_WireModel):
    """Dermatological recommendation derived from a face analysis."""

    condition: str = "No significant issues detected"
    description: str = ""
    severity: Severity = Severity.LOW
    recommendations: list[str] = Field(default_factory=list)
    treatments: list[str] = Field(default_factory=list)
    provenance: Provenance

    @field_validator("severity", mode="before")
    @classmethod
    def _severity(cls, v: object) -> object:  # noqa: N805
        if isinstance(v, str):
            return Severity.parse(v)
        return v


AnalysisResult = Union[FaceAnalysis, MedicalRecommendation]


class AnalysisRequest(BaseModel):
    """A single, transient analysis request.

    Face requests carry encoded image bytes; medical recommendation requests
    carry the face result they are derived from.
    """

    model_config = ConfigDict(frozen=True)

    kind: AnalysisKind
    image: bytes | None = None
    face: FaceAnalysis | None = None

    @model_validator(mode="after")
    def _content_matches_kind(self) -> AnalysisRequest:
        if self.kind is AnalysisKind.FACE and not self.image:
            raise ValueError("face requests require image bytes")
        if self.kind is AnalysisKind.MEDICAL_RECOMMENDATION and self.face is None:
            raise ValueError("medical recommendation requests require a face result")
        return self

    @classmethod
    def for_face(cls, image: bytes) -> AnalysisRequest:
        return cls(kind=AnalysisKind.FACE, image=image)

    @classmethod
    def for_medical(cls, face: FaceAnalysis) -> AnalysisRequest:
        return cls(kind=AnalysisKind.MEDICAL_RECOMMENDATION, face=face)
