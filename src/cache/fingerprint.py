# src/cache/fingerprint.py — v1
"""Content hashing and cache key derivation.

Face keys hash the raw image bytes. Medical recommendation keys hash the face
result (score + narrative), so identical face outcomes share one
recommendation regardless of which image produced them.
"""

from __future__ import annotations

import hashlib

from facetier.core.models import AnalysisKind, AnalysisRequest, FaceAnalysis

FACE_NAMESPACE = "face_analysis"
MEDICAL_NAMESPACE = "medical_solution"


def content_hash(data: bytes | str) -> str:
    """SHA-256 hex digest; strings are hashed as UTF-8."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest()


def namespaced_key(namespace: str, canonical: bytes | str) -> str:
    return f"{namespace}:{content_hash(canonical)}"


def face_cache_key(image: bytes) -> str:
    return namespaced_key(FACE_NAMESPACE, image)


def medical_canonical_text(face: FaceAnalysis) -> str:
    """Composite text identifying a face outcome for medical caching."""
    return f"{face.attractiveness_score}_{face.overall_analysis}"


def medical_cache_key(face: FaceAnalysis) -> str:
    return namespaced_key(MEDICAL_NAMESPACE, medical_canonical_text(face))


def cache_key(request: AnalysisRequest) -> str:
    """Derive the cache key for a request."""
    if request.kind is AnalysisKind.FACE:
        if request.image is None:
            raise ValueError("face request carries no image")
        return face_cache_key(request.image)
    if request.face is None:
        raise ValueError("medical request carries no face analysis")
    return medical_cache_key(request.face)
