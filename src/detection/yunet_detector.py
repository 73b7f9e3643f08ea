# src/detection/yunet_detector.py — v1
"""OpenCV YuNet detector (FACE_DETECTOR=yunet).

Requires the face_detection_yunet ONNX model (FACE_DETECTOR_MODEL). Each
detection row is: x, y, w, h, right eye, left eye, nose tip, right mouth
corner, left mouth corner (x, y pairs), score.
"""

from __future__ import annotations

import logging
from pathlib import Path

import cv2
import numpy as np

from facetier.detection.base_detector import BaseFaceDetector
from facetier.detection.models import BoundingBox, DetectedFace, LandmarkType, Point

logger = logging.getLogger(__name__)

_LANDMARK_COLUMNS = (
    (LandmarkType.RIGHT_EYE, 4),
    (LandmarkType.LEFT_EYE, 6),
    (LandmarkType.NOSE_BASE, 8),
    (LandmarkType.RIGHT_MOUTH, 10),
    (LandmarkType.LEFT_MOUTH, 12),
)


class YuNetDetector(BaseFaceDetector):
    """CNN face detector with five landmarks per face."""

    def __init__(
        self,
        model_path: Path | str,
        score_threshold: float = 0.8,
        nms_threshold: float = 0.3,
        top_k: int = 50,
    ) -> None:
        path = Path(model_path).expanduser()
        if not path.is_file():
            raise FileNotFoundError(f"YuNet model not found: {path}")
        try:
            self._detector = cv2.FaceDetectorYN.create(
                str(path), "", (320, 320), score_threshold, nms_threshold, top_k
            )
        except cv2.error as e:
            raise RuntimeError(f"Failed to load YuNet model {path}: {e}") from e

    @property
    def name(self) -> str:
        return "yunet"

    def detect(self, image: np.ndarray) -> list[DetectedFace]:
        if image.ndim == 2:
            image = cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
        h, w = image.shape[:2]
        self._detector.setInputSize((w, h))
        _, rows = self._detector.detect(image)
        if rows is None:
            return []

        faces = [_row_to_face(row) for row in rows]
        faces.sort(key=lambda f: f.bounding_box.width * f.bounding_box.height, reverse=True)
        logger.debug("YuNet detector found %d face(s)", len(faces))
        return faces


def _row_to_face(row: np.ndarray) -> DetectedFace:
    x, y, fw, fh = (float(v) for v in row[:4])
    landmarks = {
        kind: Point(float(row[col]), float(row[col + 1]))
        for kind, col in _LANDMARK_COLUMNS
    }
    return DetectedFace(
        bounding_box=BoundingBox(x, y, fw, fh),
        landmarks=landmarks,
        confidence=float(row[14]),
    )
