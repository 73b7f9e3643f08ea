# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides sample results, a controllable clock, fake remote clients, fake
detectors and an in-memory storage handle. No network or model downloads.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

import numpy as np
import pytest

from facetier.cache.memory_store import MemoryCacheStore
from facetier.core.models import (
    BestAngle,
    FaceAnalysis,
    FeatureScores,
    MedicalRecommendation,
    Provenance,
    Severity,
)
from facetier.detection.base_detector import BaseFaceDetector
from facetier.detection.models import BoundingBox, DetectedFace, LandmarkType, Point
from facetier.llm.base_client import BaseInferenceClient
from facetier.llm.models import ErrorClass, RemoteFailure, RemoteOutcome, RemoteSuccess
from facetier.network.connectivity import ConnectivityOracle, LinkType
from facetier.storage.database import Database


# === Helpers ===


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class FakeInferenceClient(BaseInferenceClient):
    """Scripted remote client that records every call."""

    def __init__(
        self,
        face: RemoteOutcome | None = None,
        medical: RemoteOutcome | None = None,
        raises: Exception | None = None,
    ) -> None:
        self.face_outcome = face
        self.medical_outcome = medical
        self.raises = raises
        self.calls: list[str] = []

    async def analyze_face(self, image: bytes) -> RemoteOutcome:
        self.calls.append("face")
        if self.raises is not None:
            raise self.raises
        return self.face_outcome or RemoteFailure(error_class=ErrorClass.TRANSIENT)

    async def recommend_medical(self, face: FaceAnalysis) -> RemoteOutcome:
        self.calls.append("medical")
        if self.raises is not None:
            raise self.raises
        return self.medical_outcome or RemoteFailure(error_class=ErrorClass.TRANSIENT)

    @property
    def provider_name(self) -> str:
        return "fake"


class FakeDetector(BaseFaceDetector):
    """Returns a fixed list of faces (or raises)."""

    def __init__(
        self,
        faces: list[DetectedFace] | None = None,
        raises: Exception | None = None,
    ) -> None:
        self.faces = faces or []
        self.raises = raises
        self.closed = False

    def detect(self, image: np.ndarray) -> list[DetectedFace]:
        if self.raises is not None:
            raise self.raises
        return list(self.faces)

    @property
    def name(self) -> str:
        return "fake"

    def close(self) -> None:
        self.closed = True


def oracle(*links: LinkType) -> ConnectivityOracle:
    """ConnectivityOracle whose scan reports the given links."""
    return ConnectivityOracle(scanner=lambda: set(links))


# === FIXTURES: Sample data ===


@pytest.fixture
def sample_features() -> FeatureScores:
    return FeatureScores(
        symmetry=90, skin_quality=80, facial_structure=90,
        eye_area=90, nose=95, lips=75,
    )


@pytest.fixture
def sample_face(sample_features: FeatureScores) -> FaceAnalysis:
    """Remote-style face analysis result."""
    return FaceAnalysis(
        attractiveness_score=84.4,
        best_angle=BestAngle.THREE_QUARTER_LEFT,
        best_angle_description="Balanced and flattering.",
        features=sample_features,
        overall_analysis="Strong symmetry and clear skin.",
        provenance=Provenance.REMOTE,
    )


@pytest.fixture
def sample_medical() -> MedicalRecommendation:
    return MedicalRecommendation(
        condition="Healthy Skin",
        description="Skin is in good condition.",
        severity=Severity.LOW,
        recommendations=["Use sunscreen daily", "Stay hydrated"],
        treatments=["Regular moisturization"],
        provenance=Provenance.REMOTE,
    )


@pytest.fixture
def frontal_face() -> DetectedFace:
    """Centered 160x200 face in a 640px-wide image, all landmarks present."""
    return DetectedFace(
        bounding_box=BoundingBox(left=240, top=100, width=160, height=200),
        landmarks={
            LandmarkType.LEFT_EYE: Point(356, 170),
            LandmarkType.RIGHT_EYE: Point(284, 170),
            LandmarkType.NOSE_BASE: Point(320, 220),
            LandmarkType.LEFT_MOUTH: Point(350, 260),
            LandmarkType.RIGHT_MOUTH: Point(290, 260),
            LandmarkType.BOTTOM_MOUTH: Point(320, 272),
        },
        tracking_id=1,
    )


@pytest.fixture
def blank_jpeg() -> bytes:
    """A decodable 480x640 grey JPEG with no face in it."""
    import cv2

    ok, buffer = cv2.imencode(".jpg", np.full((480, 640, 3), 128, dtype=np.uint8))
    assert ok
    return buffer.tobytes()


# === FIXTURES: Infrastructure ===


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_cache(clock: FakeClock) -> MemoryCacheStore:
    return MemoryCacheStore(clock=clock)


@pytest.fixture
def database():
    db = Database()
    yield db
    db.close()


@pytest.fixture
def remote_success(sample_face, sample_medical) -> FakeInferenceClient:
    return FakeInferenceClient(
        face=RemoteSuccess(result=sample_face),
        medical=RemoteSuccess(result=sample_medical),
    )


@pytest.fixture
def make_remote() -> Callable[..., FakeInferenceClient]:
    return FakeInferenceClient


@pytest.fixture
def make_oracle() -> Callable[..., ConnectivityOracle]:
    return oracle


@pytest.fixture
def make_detector() -> Callable[..., FakeDetector]:
    return FakeDetector
