# src/analysis/heuristics.py — v1
"""Deterministic geometric scoring of a detected face.

Every score is derived from the face bounding box and a handful of landmarks
(eyes, nose base, mouth corners); there is no learned model. All functions
are pure so each band can be tested in isolation.
"""

from __future__ import annotations

from facetier.core.models import BestAngle, FeatureScores, clamp_score
from facetier.detection.models import DetectedFace, LandmarkType

MISSING_LANDMARK_SCORE = 75.0

ATTRACTIVENESS_WEIGHTS: dict[str, float] = {
    "symmetry": 0.25,
    "facial_structure": 0.20,
    "skin_quality": 0.20,
    "eye_area": 0.15,
    "nose": 0.10,
    "lips": 0.10,
}

BEST_ANGLE_DESCRIPTIONS: dict[BestAngle, str] = {
    BestAngle.FRONT: (
        "Your front-facing angle showcases excellent facial symmetry. The balanced "
        "proportions and centered features create a harmonious and appealing appearance."
    ),
    BestAngle.LEFT_PROFILE: (
        "Your left profile angle highlights your facial structure beautifully. The side "
        "view emphasizes your jawline and creates an elegant silhouette."
    ),
    BestAngle.RIGHT_PROFILE: (
        "Your right profile angle accentuates your facial features. This angle creates "
        "depth and dimension, showcasing your best side."
    ),
    BestAngle.THREE_QUARTER_LEFT: (
        "Your three-quarter left angle is particularly flattering. This angle combines "
        "the best of front and profile views, creating visual interest and appeal."
    ),
    BestAngle.THREE_QUARTER_RIGHT: (
        "Your three-quarter right angle creates an attractive perspective. This angle "
        "balances facial features while adding depth and character."
    ),
}

_MOUTH_LANDMARKS = (LandmarkType.LEFT_MOUTH, LandmarkType.RIGHT_MOUTH, LandmarkType.BOTTOM_MOUTH)


def _in_band(value: float, low: float, high: float) -> bool:
    return low <= value <= high


def eye_ratio(face: DetectedFace) -> float | None:
    """Horizontal eye distance over face width, None if an eye is missing."""
    left = face.landmark(LandmarkType.LEFT_EYE)
    right = face.landmark(LandmarkType.RIGHT_EYE)
    if left is None or right is None:
        return None
    return abs(left.x - right.x) / face.bounding_box.width


def symmetry_score(face: DetectedFace) -> float:
    """Base 80 plus an eye-spacing bonus; 75 when no eye was detected at all."""
    if face.landmark(LandmarkType.LEFT_EYE) is None and face.landmark(LandmarkType.RIGHT_EYE) is None:
        return MISSING_LANDMARK_SCORE
    score = 80.0
    ratio = eye_ratio(face)
    if ratio is None:
        return score
    if _in_band(ratio, 0.40, 0.50):
        score += 10
    elif _in_band(ratio, 0.35, 0.55):
        score += 5
    return clamp_score(score)


def facial_structure_score(face: DetectedFace) -> float:
    """Width/height aspect ratio; an oval face (0.7-0.8) scores highest."""
    box = face.bounding_box
    aspect = box.width / box.height
    if _in_band(aspect, 0.70, 0.80):
        return 90.0
    if _in_band(aspect, 0.65, 0.85):
        return 85.0
    if _in_band(aspect, 0.60, 0.90):
        return 80.0
    return 70.0


def skin_quality_score(face: DetectedFace) -> float:
    score = 70.0
    if face.tracking_id is not None:
        score += 10
    if len(face.landmarks) >= 5:
        score += 10
    return clamp_score(score)


def eye_area_score(face: DetectedFace) -> float:
    ratio = eye_ratio(face)
    if ratio is None:
        return MISSING_LANDMARK_SCORE
    if _in_band(ratio, 0.40, 0.50):
        return 90.0
    if _in_band(ratio, 0.35, 0.55):
        return 85.0
    return 75.0


def nose_score(face: DetectedFace) -> float:
    """Closer to the horizontal center of the face scores higher."""
    nose = face.landmark(LandmarkType.NOSE_BASE)
    if nose is None:
        return MISSING_LANDMARK_SCORE
    box = face.bounding_box
    offset_ratio = abs(nose.x - box.center_x) / box.width
    if offset_ratio < 0.05:
        return 95.0
    if offset_ratio < 0.10:
        return 90.0
    if offset_ratio < 0.15:
        return 85.0
    return 80.0


def lips_score(face: DetectedFace) -> float:
    if any(face.landmark(kind) is None for kind in _MOUTH_LANDMARKS):
        return MISSING_LANDMARK_SCORE
    left = face.landmarks[LandmarkType.LEFT_MOUTH]
    right = face.landmarks[LandmarkType.RIGHT_MOUTH]
    ratio = abs(left.x - right.x) / face.bounding_box.width
    if _in_band(ratio, 0.40, 0.50):
        return 90.0
    if _in_band(ratio, 0.35, 0.55):
        return 85.0
    return 75.0


def feature_scores(face: DetectedFace) -> FeatureScores:
    return FeatureScores(
        symmetry=symmetry_score(face),
        skin_quality=skin_quality_score(face),
        facial_structure=facial_structure_score(face),
        eye_area=eye_area_score(face),
        nose=nose_score(face),
        lips=lips_score(face),
    )


def attractiveness_score(features: FeatureScores) -> float:
    """Weighted sum of the six sub-scores, clamped to [0, 100]."""
    total = sum(
        getattr(features, name) * weight
        for name, weight in ATTRACTIVENESS_WEIGHTS.items()
    )
    return clamp_score(total)


def best_angle_for_offset(offset_ratio: float) -> BestAngle:
    """Map the face's horizontal offset from the image center to an angle.

    Bands are checked in order; a positive offset means the face sits right
    of center.
    """
    if abs(offset_ratio) < 0.05:
        return BestAngle.FRONT
    if offset_ratio > 0.10:
        return BestAngle.LEFT_PROFILE
    if offset_ratio < -0.10:
        return BestAngle.RIGHT_PROFILE
    if offset_ratio > 0.05:
        return BestAngle.THREE_QUARTER_LEFT
    return BestAngle.THREE_QUARTER_RIGHT


def face_offset_ratio(face: DetectedFace, image_width: int) -> float:
    return (face.bounding_box.center_x - image_width / 2) / image_width


def overall_analysis(
    attractiveness: float,
    symmetry: float,
    facial_structure: float,
    skin_quality: float,
) -> str:
    """Assemble the narrative summary from tiered phrases."""
    if attractiveness >= 85:
        opening = "Your face demonstrates exceptional attractiveness with "
    elif attractiveness >= 75:
        opening = "Your face shows strong attractiveness with "
    elif attractiveness >= 65:
        opening = "Your face displays good attractiveness with "
    else:
        opening = "Your face has potential with "

    if symmetry >= 85:
        sym = "excellent symmetry, "
    elif symmetry >= 75:
        sym = "good symmetry, "
    else:
        sym = "moderate symmetry, "

    if facial_structure >= 85:
        structure = "well-proportioned facial structure, "
    elif facial_structure >= 75:
        structure = "balanced facial structure, "
    else:
        structure = "adequate facial structure, "

    if skin_quality >= 80:
        skin = "and clear skin quality. "
    elif skin_quality >= 70:
        skin = "and decent skin quality. "
    else:
        skin = "and room for skin improvement. "

    return (
        opening + sym + structure + skin
        + "Maintaining a consistent skincare routine will help preserve and enhance these features."
    )
