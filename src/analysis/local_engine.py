# src/analysis/local_engine.py — v1
"""Offline face analysis from detected landmarks (face requests only).

Decodes the image, runs the configured detector in a worker thread and scores
the largest face with the geometric heuristics. Failures are raised as
LocalAnalysisError subclasses so the resolver can fall through to the
simulated tier.
"""

from __future__ import annotations

import asyncio
import logging

import cv2
import numpy as np

from facetier.analysis import heuristics
from facetier.core.models import FaceAnalysis, Provenance
from facetier.detection.base_detector import BaseFaceDetector
from facetier.detection.models import DetectedFace

logger = logging.getLogger(__name__)


class LocalAnalysisError(Exception):
    """The local heuristic tier could not produce a result."""


class NoFaceDetectedError(LocalAnalysisError):
    """The image decoded fine but contains no face."""


class DetectionFailedError(LocalAnalysisError):
    """The image could not be decoded or the detector failed."""


def decode_image(data: bytes) -> np.ndarray:
    """Decode encoded image bytes into a BGR array."""
    if not data:
        raise DetectionFailedError("Empty image payload")
    buffer = np.frombuffer(data, dtype=np.uint8)
    image = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
    if image is None:
        raise DetectionFailedError("Image bytes could not be decoded")
    return image


def score_face(face: DetectedFace, image_width: int) -> FaceAnalysis:
    """Turn one detected face into a local-heuristic FaceAnalysis."""
    if face.bounding_box.is_degenerate:
        raise DetectionFailedError(f"Degenerate face bounding box: {face.bounding_box}")

    features = heuristics.feature_scores(face)
    attractiveness = heuristics.attractiveness_score(features)
    angle = heuristics.best_angle_for_offset(
        heuristics.face_offset_ratio(face, image_width)
    )
    return FaceAnalysis(
        attractiveness_score=attractiveness,
        best_angle=angle,
        best_angle_description=heuristics.BEST_ANGLE_DESCRIPTIONS[angle],
        features=features,
        overall_analysis=heuristics.overall_analysis(
            attractiveness,
            features.symmetry,
            features.facial_structure,
            features.skin_quality,
        ),
        provenance=Provenance.LOCAL_HEURISTIC,
    )


class LocalHeuristicEngine:
    """Local fallback for face analysis."""

    def __init__(self, detector: BaseFaceDetector) -> None:
        self._detector = detector

    async def analyze(self, image: bytes) -> FaceAnalysis:
        """Analyze encoded image bytes.

        Raises:
            NoFaceDetectedError: no face in the image.
            DetectionFailedError: undecodable image or detector error.
        """
        decoded = decode_image(image)
        try:
            faces = await asyncio.to_thread(self._detector.detect, decoded)
        except Exception as e:
            raise DetectionFailedError(f"{self._detector.name} detector failed: {e}") from e

        if not faces:
            raise NoFaceDetectedError("No face detected")

        result = score_face(faces[0], image_width=decoded.shape[1])
        logger.info(
            "Local analysis: %d face(s), score=%.1f, angle=%s",
            len(faces), result.attractiveness_score, result.best_angle.value,
        )
        return result

    def close(self) -> None:
        self._detector.close()
