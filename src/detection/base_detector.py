# src/detection/base_detector.py — v1
"""Abstract face detector interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from facetier.detection.models import DetectedFace


class BaseFaceDetector(ABC):
    """Finds faces and landmarks in a decoded BGR image."""

    @abstractmethod
    def detect(self, image: np.ndarray) -> list[DetectedFace]:
        """Return detected faces, largest first. Empty list when none."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Detector identifier (haar, yunet)."""

    def close(self) -> None:
        """Release native resources, if any."""
