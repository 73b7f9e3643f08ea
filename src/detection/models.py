# src/detection/models.py — v1
"""Detected face geometry: bounding box, landmarks, tracking id.

Coordinates are in image pixels, origin top-left.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class LandmarkType(str, Enum):
    LEFT_EYE = "left_eye"
    RIGHT_EYE = "right_eye"
    NOSE_BASE = "nose_base"
    LEFT_MOUTH = "left_mouth"
    RIGHT_MOUTH = "right_mouth"
    BOTTOM_MOUTH = "bottom_mouth"
    LEFT_CHEEK = "left_cheek"
    RIGHT_CHEEK = "right_cheek"
    LEFT_EAR = "left_ear"
    RIGHT_EAR = "right_ear"


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class BoundingBox:
    left: float
    top: float
    width: float
    height: float

    @property
    def center_x(self) -> float:
        return self.left + self.width / 2

    @property
    def center_y(self) -> float:
        return self.top + self.height / 2

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass
class DetectedFace:
    """One face found by a detector."""

    bounding_box: BoundingBox
    landmarks: dict[LandmarkType, Point] = field(default_factory=dict)
    tracking_id: int | None = None
    confidence: float = 1.0

    def landmark(self, kind: LandmarkType) -> Point | None:
        return self.landmarks.get(kind)
