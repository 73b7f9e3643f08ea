# src/llm/prompts.py — v1
"""Prompt templates for the remote face and medical analyses."""

from __future__ import annotations

from facetier.core.models import FaceAnalysis

FACE_SCHEMA_NAME = "FaceAnalysis"
MEDICAL_SCHEMA_NAME = "MedicalRecommendation"

FACE_PROMPT = """Analyze this face image and provide a detailed facial analysis.

Return ONLY a single valid JSON object matching the FaceAnalysis schema below (no markdown, no code blocks, just pure JSON):
{
  "attractivenessScore": <number between 0-100>,
  "bestAngle": "<one of: Front, Left Profile, Right Profile, Three-Quarter Left, Three-Quarter Right>",
  "bestAngleDescription": "<why this is the best angle, mentioning symmetry, features, lighting>",
  "facialFeatures": {
    "symmetry": <number 0-100>,
    "skinQuality": <number 0-100>,
    "facialStructure": <number 0-100>,
    "eyeArea": <number 0-100>,
    "nose": <number 0-100>,
    "lips": <number 0-100>
  },
  "overallAnalysis": "<analysis of symmetry, proportions, skin condition and overall appearance>"
}

Be professional, constructive, and detailed in your analysis."""

_MEDICAL_TEMPLATE = """Based on this facial analysis, provide professional dermatological recommendations and solutions.

Face Analysis Details:
- Overall Analysis: {overall}
- Attractiveness Score: {score:.1f}/100
- Facial Features Scores:
  - Symmetry: {symmetry:.1f}/100
  - Skin Quality: {skin_quality:.1f}/100
  - Facial Structure: {facial_structure:.1f}/100
  - Eye Area: {eye_area:.1f}/100
  - Nose: {nose:.1f}/100
  - Lips: {lips:.1f}/100

Return ONLY a single valid JSON object matching the MedicalRecommendation schema below (no markdown, no code blocks, just pure JSON):
{{
  "condition": "<skin condition assessment, e.g. 'Healthy Skin', 'Mild Skin Concerns', 'Moderate Skin Issues'>",
  "description": "<description of the skin condition based on the analysis>",
  "recommendations": ["<recommendation 1>", "<recommendation 2>", "<recommendation 3>", "<recommendation 4>"],
  "severity": "<Low, Moderate, or High>",
  "treatments": ["<treatment 1>", "<treatment 2>", "<treatment 3>"]
}}

Provide professional, evidence-based dermatological advice focused on skincare routines, products and treatments appropriate for the identified condition."""


def build_medical_prompt(face: FaceAnalysis) -> str:
    """Textual summary of a face result's sub-scores."""
    f = face.features
    return _MEDICAL_TEMPLATE.format(
        overall=face.overall_analysis,
        score=face.attractiveness_score,
        symmetry=f.symmetry,
        skin_quality=f.skin_quality,
        facial_structure=f.facial_structure,
        eye_area=f.eye_area,
        nose=f.nose,
        lips=f.lips,
    )


def sniff_image_mime(data: bytes) -> str:
    """Guess an image MIME type from magic bytes (JPEG when unknown)."""
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    if data[:6] in (b"GIF87a", b"GIF89a"):
        return "image/gif"
    return "image/jpeg"
