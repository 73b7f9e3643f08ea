# src/detection/haar_detector.py — v1
"""OpenCV Haar cascade detector (FACE_DETECTOR=haar, the default).

Needs no model download: the cascades ship with opencv-python 4.x. Eyes are
searched in the upper half of each face box and the mouth (smile cascade) in
the lower third. Only what a cascade finds is reported: eye centres and the
mouth box corners. There is no nose or bottom-of-mouth cascade, so those
landmarks are never set.
"""

from __future__ import annotations

import logging

import cv2
import numpy as np

from facetier.detection.base_detector import BaseFaceDetector
from facetier.detection.models import BoundingBox, DetectedFace, LandmarkType, Point

logger = logging.getLogger(__name__)

_FACE_CASCADE = "haarcascade_frontalface_default.xml"
_EYE_CASCADE = "haarcascade_eye.xml"
_SMILE_CASCADE = "haarcascade_smile.xml"


class HaarCascadeDetector(BaseFaceDetector):
    """Face, eye and mouth detection with bundled Haar cascades."""

    def __init__(self, min_face_size: float = 0.1) -> None:
        self._min_face_size = min_face_size
        self._face = _load_cascade(_FACE_CASCADE)
        self._eye = _load_cascade(_EYE_CASCADE)
        self._smile = _load_cascade(_SMILE_CASCADE)

    @property
    def name(self) -> str:
        return "haar"

    def detect(self, image: np.ndarray) -> list[DetectedFace]:
        gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY) if image.ndim == 3 else image
        gray = cv2.equalizeHist(gray)
        h, w = gray.shape[:2]
        min_side = max(1, int(min(h, w) * self._min_face_size))

        boxes = self._face.detectMultiScale(
            gray, scaleFactor=1.1, minNeighbors=5, minSize=(min_side, min_side)
        )
        faces = [self._describe(gray, tuple(int(v) for v in box)) for box in boxes]
        faces.sort(key=lambda f: f.bounding_box.width * f.bounding_box.height, reverse=True)
        logger.debug("Haar detector found %d face(s)", len(faces))
        return faces

    def _describe(self, gray: np.ndarray, box: tuple[int, ...]) -> DetectedFace:
        x, y, fw, fh = box
        landmarks: dict[LandmarkType, Point] = {}

        upper = gray[y : y + fh // 2, x : x + fw]
        eyes = self._eye.detectMultiScale(upper, scaleFactor=1.1, minNeighbors=6)
        eyes = sorted(eyes, key=lambda e: e[2] * e[3], reverse=True)[:2]
        if len(eyes) == 2:
            centers = sorted(
                (Point(x + ex + ew / 2, y + ey + eh / 2) for ex, ey, ew, eh in eyes),
                key=lambda p: p.x,
            )
            # The subject's right eye appears on the image's left.
            landmarks[LandmarkType.RIGHT_EYE] = centers[0]
            landmarks[LandmarkType.LEFT_EYE] = centers[1]

        lower_top = y + (2 * fh) // 3
        lower = gray[lower_top : y + fh, x : x + fw]
        mouths = self._smile.detectMultiScale(lower, scaleFactor=1.5, minNeighbors=15)
        if len(mouths) > 0:
            mx, my, mw, mh = max(mouths, key=lambda m: m[2] * m[3])
            mid_y = lower_top + my + mh / 2
            landmarks[LandmarkType.RIGHT_MOUTH] = Point(x + mx, mid_y)
            landmarks[LandmarkType.LEFT_MOUTH] = Point(x + mx + mw, mid_y)

        return DetectedFace(
            bounding_box=BoundingBox(float(x), float(y), float(fw), float(fh)),
            landmarks=landmarks,
        )


def _load_cascade(filename: str) -> cv2.CascadeClassifier:
    try:
        path = cv2.data.haarcascades + filename
        cascade = cv2.CascadeClassifier(path)
    except (AttributeError, cv2.error) as e:
        raise RuntimeError(f"Haar cascades unavailable in this OpenCV build: {e}") from e
    if cascade.empty():
        raise RuntimeError(f"Failed to load Haar cascade: {path}")
    return cascade
