# src/detection/detector_factory.py — v1
"""Factory for the local face detector."""

from __future__ import annotations

import logging

from facetier.config.settings import ConfigurationError, Settings
from facetier.detection.base_detector import BaseFaceDetector

logger = logging.getLogger(__name__)


def create_face_detector(settings: Settings | None = None) -> BaseFaceDetector | None:
    """Instantiate the configured detector.

    Returns None when FACE_DETECTOR=none or the detector cannot be loaded
    (missing model, OpenCV build without the needed API); the local tier is
    then skipped and the simulated tier answers instead.
    """
    settings = settings or Settings()
    kind = settings.face_detector

    if kind == "none":
        return None
    if kind not in ("haar", "yunet"):
        raise ValueError(f"Unsupported face detector: {kind!r}")

    try:
        return _load_detector(kind, settings)
    except (OSError, RuntimeError, ImportError, AttributeError) as e:
        logger.warning("Face detector %r unavailable: %s", kind, e)
        return None


def _load_detector(kind: str, settings: Settings) -> BaseFaceDetector:
    import cv2

    try:
        if kind == "haar":
            from facetier.detection.haar_detector import HaarCascadeDetector
            return HaarCascadeDetector(min_face_size=settings.face_min_size)

        from facetier.detection.yunet_detector import YuNetDetector
        if settings.face_detector_model is None:
            raise ConfigurationError("FACE_DETECTOR=yunet requires FACE_DETECTOR_MODEL")
        return YuNetDetector(settings.face_detector_model)
    except cv2.error as e:
        raise RuntimeError(f"OpenCV failed to load the {kind} detector: {e}") from e
