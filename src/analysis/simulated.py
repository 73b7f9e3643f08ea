# src/analysis/simulated.py — v1
"""Last-resort synthetic results.

Values sit in realistic bands (base value plus a small variation). The
variation comes from an injected random.Random, so a fixed seed reproduces
the same output.
"""

from __future__ import annotations

import random

from facetier.core.models import (
    BestAngle,
    FaceAnalysis,
    FeatureScores,
    MedicalRecommendation,
    Provenance,
    Severity,
)

SKIN_CONCERN_THRESHOLD = 70.0
DEFAULT_SKIN_SCORE = 75.0

SIMULATED_ANGLES: tuple[tuple[BestAngle, str], ...] = (
    (
        BestAngle.FRONT,
        "Your front-facing angle showcases balanced facial symmetry and highlights your "
        "best features. The lighting and angle create an appealing visual harmony.",
    ),
    (
        BestAngle.LEFT_PROFILE,
        "Your left profile angle emphasizes your facial structure beautifully. The side "
        "view creates depth and showcases your jawline elegantly.",
    ),
    (
        BestAngle.RIGHT_PROFILE,
        "Your right profile angle accentuates your facial features. This angle creates "
        "visual interest and highlights your best side.",
    ),
    (
        BestAngle.THREE_QUARTER_LEFT,
        "Your three-quarter left angle is particularly flattering. This angle combines "
        "front and profile views, creating an attractive perspective.",
    ),
    (
        BestAngle.THREE_QUARTER_RIGHT,
        "Your three-quarter right angle creates depth and dimension. This angle balances "
        "your features while adding character.",
    ),
)

SIMULATED_OVERALL = (
    "Your face shows good overall symmetry and balanced features. The facial structure "
    "is well-proportioned with clear skin tone. Consider maintaining good skincare "
    "routine for optimal appearance."
)

CONCERN_RECOMMENDATIONS = (
    "Use a gentle cleanser twice daily",
    "Apply moisturizer with SPF 30+ every morning",
    "Consider incorporating retinol in your evening routine",
    "Stay hydrated and maintain a balanced diet",
)
CONCERN_TREATMENTS = (
    "Topical retinoids",
    "Vitamin C serum",
    "Hyaluronic acid moisturizer",
    "Regular exfoliation (2-3 times per week)",
)
HEALTHY_RECOMMENDATIONS = (
    "Maintain current skincare routine",
    "Continue using sunscreen daily",
    "Stay hydrated",
    "Regular facial cleansing",
)
HEALTHY_TREATMENTS = (
    "Preventive skincare maintenance",
    "Regular moisturization",
)


class SimulatedGenerator:
    """Produces synthetic face and medical results, always tagged simulated."""

    def __init__(self, rng: random.Random | None = None, seed: int | None = None) -> None:
        self._rng = rng if rng is not None else random.Random(seed)

    def face(self) -> FaceAnalysis:
        rng = self._rng
        angle, description = rng.choice(SIMULATED_ANGLES)
        return FaceAnalysis(
            attractiveness_score=72.0 + rng.randrange(18),
            best_angle=angle,
            best_angle_description=description,
            features=FeatureScores(
                symmetry=78.0 + rng.randrange(8),
                skin_quality=75.0 + rng.randrange(10),
                facial_structure=80.0 + rng.randrange(6),
                eye_area=82.0 + rng.randrange(8),
                nose=76.0 + rng.randrange(6),
                lips=79.0 + rng.randrange(7),
            ),
            overall_analysis=SIMULATED_OVERALL,
            provenance=Provenance.SIMULATED,
        )

    def medical(self, face: FaceAnalysis | None) -> MedicalRecommendation:
        """Recommendation keyed on the face result's skin quality."""
        skin = face.features.skin_quality if face is not None else DEFAULT_SKIN_SCORE

        if skin < SKIN_CONCERN_THRESHOLD:
            return MedicalRecommendation(
                condition="Mild Skin Concerns",
                description=(
                    f"Based on the facial analysis, your skin quality scored {skin:.1f}/100, "
                    "which indicates moderate quality. Some improvements can be made "
                    "through targeted skincare."
                ),
                severity=Severity.MODERATE,
                recommendations=list(CONCERN_RECOMMENDATIONS),
                treatments=list(CONCERN_TREATMENTS),
                provenance=Provenance.SIMULATED,
            )

        quality = "good" if skin > 75 else "moderate"
        return MedicalRecommendation(
            condition="Healthy Skin",
            description=(
                f"Based on the facial analysis, your skin quality scored {skin:.1f}/100, "
                f"which indicates {quality} quality. Maintain your current routine for "
                "optimal results."
            ),
            severity=Severity.LOW,
            recommendations=list(HEALTHY_RECOMMENDATIONS),
            treatments=list(HEALTHY_TREATMENTS),
            provenance=Provenance.SIMULATED,
        )
