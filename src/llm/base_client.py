# src/llm/base_client.py — v1
"""Abstract remote inference client interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from facetier.core.models import FaceAnalysis
from facetier.llm.models import RemoteOutcome


class BaseInferenceClient(ABC):
    """Issues remote analyses; returns outcomes, never raises."""

    @abstractmethod
    async def analyze_face(self, image: bytes) -> RemoteOutcome:
        """Remote face analysis of encoded image bytes."""

    @abstractmethod
    async def recommend_medical(self, face: FaceAnalysis) -> RemoteOutcome:
        """Remote medical recommendation derived from a face result."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier."""
