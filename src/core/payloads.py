# src/core/payloads.py — v1
"""Central decoding and encoding of analysis payloads.

Remote responses and cache rows both go through here, so every field default
lives in the models of ``facetier.core.models`` and nowhere else. Decoding
either returns a typed result or raises PayloadError.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from facetier.core.models import (
    AnalysisKind,
    AnalysisResult,
    FaceAnalysis,
    MedicalRecommendation,
    Provenance,
)


class PayloadError(Exception):
    """Payload is not a JSON object matching the expected schema."""


def decode_face_payload(data: Any, provenance: Provenance) -> FaceAnalysis:
    """Build a FaceAnalysis from a parsed JSON value."""
    _require_object(data, "face analysis")
    try:
        return FaceAnalysis.model_validate({**data, "provenance": provenance})
    except ValidationError as e:
        raise PayloadError(f"Invalid face analysis payload: {e}") from e


def decode_medical_payload(data: Any, provenance: Provenance) -> MedicalRecommendation:
    """Build a MedicalRecommendation from a parsed JSON value."""
    _require_object(data, "medical recommendation")
    recs = data.get("recommendations")
    treatments = data.get("treatments")
    if recs is not None and not isinstance(recs, list):
        raise PayloadError("recommendations must be a list")
    if treatments is not None and not isinstance(treatments, list):
        raise PayloadError("treatments must be a list")
    try:
        return MedicalRecommendation.model_validate({**data, "provenance": provenance})
    except ValidationError as e:
        raise PayloadError(f"Invalid medical recommendation payload: {e}") from e


def decode_payload(
    kind: AnalysisKind, data: Any, provenance: Provenance
) -> AnalysisResult:
    """Dispatch on request kind."""
    if kind is AnalysisKind.FACE:
        return decode_face_payload(data, provenance)
    return decode_medical_payload(data, provenance)


def decode_payload_text(
    kind: AnalysisKind, text: str, provenance: Provenance
) -> AnalysisResult:
    """Decode a serialized payload (e.g. a cache row)."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise PayloadError(f"Payload is not valid JSON: {e}") from e
    return decode_payload(kind, data, provenance)


def encode_payload(result: AnalysisResult) -> str:
    """Serialize a result to its canonical cache payload.

    Provenance is excluded: it describes how a result was obtained, not what
    it says, and is re-attached on decode.
    """
    data = result.model_dump(mode="json", by_alias=True, exclude={"provenance"})
    return json.dumps(data, sort_keys=True, ensure_ascii=False)


def _require_object(data: Any, what: str) -> None:
    if not isinstance(data, dict):
        raise PayloadError(f"Expected a JSON object for {what}, got {type(data).__name__}")
