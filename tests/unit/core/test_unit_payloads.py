# tests/unit/core/test_unit_payloads.py — v1
"""Tests for core/payloads.py: central decode/encode of analysis payloads."""

from __future__ import annotations

import json

import pytest

from facetier.core.models import AnalysisKind, BestAngle, Provenance, Severity
from facetier.core.payloads import (
    PayloadError,
    decode_face_payload,
    decode_medical_payload,
    decode_payload,
    decode_payload_text,
    encode_payload,
)

FACE_PAYLOAD = {
    "attractivenessScore": 82,
    "bestAngle": "Left Profile",
    "bestAngleDescription": "Strong jawline.",
    "facialFeatures": {
        "symmetry": 80, "skinQuality": 78, "facialStructure": 85,
        "eyeArea": 88, "nose": 79, "lips": 81,
    },
    "overallAnalysis": "Well balanced.",
}


class TestDecodeFace:
    def test_full_payload(self):
        face = decode_face_payload(FACE_PAYLOAD, Provenance.REMOTE)
        assert face.attractiveness_score == 82.0
        assert face.best_angle is BestAngle.LEFT_PROFILE
        assert face.features.eye_area == 88.0
        assert face.provenance is Provenance.REMOTE

    def test_missing_optional_fields_use_defaults(self):
        data = {k: v for k, v in FACE_PAYLOAD.items()
                if k in ("attractivenessScore", "facialFeatures")}
        face = decode_face_payload(data, Provenance.REMOTE)
        assert face.best_angle is BestAngle.FRONT
        assert face.overall_analysis == ""

    def test_provenance_in_payload_is_overridden(self):
        data = {**FACE_PAYLOAD, "provenance": "simulated"}
        face = decode_face_payload(data, Provenance.CACHED)
        assert face.provenance is Provenance.CACHED

    def test_missing_score_rejected(self):
        data = {k: v for k, v in FACE_PAYLOAD.items() if k != "attractivenessScore"}
        with pytest.raises(PayloadError):
            decode_face_payload(data, Provenance.REMOTE)

    def test_non_numeric_feature_rejected(self):
        data = {**FACE_PAYLOAD, "facialFeatures": {**FACE_PAYLOAD["facialFeatures"], "nose": "big"}}
        with pytest.raises(PayloadError):
            decode_face_payload(data, Provenance.REMOTE)

    def test_unknown_angle_rejected(self):
        with pytest.raises(PayloadError):
            decode_face_payload({**FACE_PAYLOAD, "bestAngle": "Top"}, Provenance.REMOTE)

    @pytest.mark.parametrize("data", [[], "text", 42, None])
    def test_non_object_rejected(self, data):
        with pytest.raises(PayloadError):
            decode_face_payload(data, Provenance.REMOTE)


class TestDecodeMedical:
    def test_full_payload(self):
        rec = decode_medical_payload({
            "condition": "Mild Skin Concerns",
            "description": "Some dryness.",
            "severity": "Moderate",
            "recommendations": ["Moisturize"],
            "treatments": ["Hyaluronic acid"],
        }, Provenance.REMOTE)
        assert rec.severity is Severity.MODERATE
        assert rec.recommendations == ["Moisturize"]

    def test_empty_object_uses_defaults(self):
        rec = decode_medical_payload({}, Provenance.REMOTE)
        assert rec.condition == "No significant issues detected"
        assert rec.severity is Severity.LOW

    def test_recommendations_must_be_list(self):
        with pytest.raises(PayloadError):
            decode_medical_payload({"recommendations": "drink water"}, Provenance.REMOTE)

    def test_treatments_must_be_list(self):
        with pytest.raises(PayloadError):
            decode_medical_payload({"treatments": {"a": 1}}, Provenance.REMOTE)


class TestDispatchAndText:
    def test_decode_payload_dispatch(self):
        face = decode_payload(AnalysisKind.FACE, FACE_PAYLOAD, Provenance.REMOTE)
        assert face.attractiveness_score == 82.0
        rec = decode_payload(AnalysisKind.MEDICAL_RECOMMENDATION, {}, Provenance.REMOTE)
        assert rec.severity is Severity.LOW

    def test_invalid_json_text(self):
        with pytest.raises(PayloadError):
            decode_payload_text(AnalysisKind.FACE, "{not json", Provenance.CACHED)


class TestEncode:
    def test_excludes_provenance_and_uses_wire_names(self, sample_face):
        data = json.loads(encode_payload(sample_face))
        assert "provenance" not in data
        assert data["attractivenessScore"] == 84.4
        assert data["bestAngle"] == "Three-Quarter Left"
        assert data["facialFeatures"]["skinQuality"] == 80.0

    def test_stable_for_equal_results(self, sample_face):
        cached = sample_face.model_copy(update={"provenance": Provenance.CACHED})
        assert encode_payload(sample_face) == encode_payload(cached)

    def test_decoded_payload_re_encodes_identically(self, sample_medical):
        text = encode_payload(sample_medical)
        again = decode_payload_text(AnalysisKind.MEDICAL_RECOMMENDATION, text, Provenance.CACHED)
        assert encode_payload(again) == text
        assert again.provenance is Provenance.CACHED
