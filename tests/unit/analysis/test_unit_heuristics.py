# tests/unit/analysis/test_unit_heuristics.py — v1
"""Tests for analysis/heuristics.py: geometric scoring bands."""

from __future__ import annotations

import dataclasses

import pytest

from facetier.analysis import heuristics
from facetier.core.models import BestAngle, FeatureScores
from facetier.detection.models import BoundingBox, DetectedFace, LandmarkType, Point


def _without(face: DetectedFace, *kinds: LandmarkType) -> DetectedFace:
    landmarks = {k: v for k, v in face.landmarks.items() if k not in kinds}
    return dataclasses.replace(face, landmarks=landmarks)


def _box_face(width: float, height: float) -> DetectedFace:
    return DetectedFace(bounding_box=BoundingBox(0, 0, width, height))


class TestAttractiveness:
    def test_weighted_formula(self):
        features = FeatureScores(
            symmetry=80, facial_structure=85, skin_quality=90,
            eye_area=88, nose=80, lips=82,
        )
        assert heuristics.attractiveness_score(features) == 84.4

    def test_weights_sum_to_one(self):
        assert sum(heuristics.ATTRACTIVENESS_WEIGHTS.values()) == pytest.approx(1.0)


class TestBestAngle:
    @pytest.mark.parametrize("offset,expected", [
        (0.0, BestAngle.FRONT),
        (0.04, BestAngle.FRONT),
        (-0.04, BestAngle.FRONT),
        (0.12, BestAngle.LEFT_PROFILE),
        (-0.12, BestAngle.RIGHT_PROFILE),
        (0.07, BestAngle.THREE_QUARTER_LEFT),
        (-0.07, BestAngle.THREE_QUARTER_RIGHT),
        (0.10, BestAngle.THREE_QUARTER_LEFT),
        (-0.10, BestAngle.THREE_QUARTER_RIGHT),
    ])
    def test_bands(self, offset, expected):
        assert heuristics.best_angle_for_offset(offset) is expected

    def test_offset_ratio(self, frontal_face):
        assert heuristics.face_offset_ratio(frontal_face, 640) == pytest.approx(0.0)
        assert heuristics.face_offset_ratio(frontal_face, 400) == pytest.approx(0.3)


class TestSubScores:
    def test_frontal_face(self, frontal_face):
        f = heuristics.feature_scores(frontal_face)
        assert f.symmetry == 90.0
        assert f.eye_area == 90.0
        assert f.facial_structure == 90.0
        assert f.skin_quality == 90.0
        assert f.nose == 95.0
        assert f.lips == 85.0

    def test_one_eye_keeps_symmetry_base(self, frontal_face):
        face = _without(frontal_face, LandmarkType.RIGHT_EYE, LandmarkType.LEFT_MOUTH,
                        LandmarkType.RIGHT_MOUTH, LandmarkType.BOTTOM_MOUTH)
        assert heuristics.symmetry_score(face) == 80.0
        assert heuristics.eye_area_score(face) == heuristics.MISSING_LANDMARK_SCORE

    def test_no_eyes_gives_neutral_symmetry(self, frontal_face):
        face = _without(frontal_face, LandmarkType.LEFT_EYE, LandmarkType.RIGHT_EYE)
        assert heuristics.symmetry_score(face) == heuristics.MISSING_LANDMARK_SCORE
        assert heuristics.eye_area_score(face) == heuristics.MISSING_LANDMARK_SCORE

    def test_missing_nose(self, frontal_face):
        face = _without(frontal_face, LandmarkType.NOSE_BASE)
        assert heuristics.nose_score(face) == heuristics.MISSING_LANDMARK_SCORE

    def test_lips_need_all_mouth_landmarks(self, frontal_face):
        face = _without(frontal_face, LandmarkType.BOTTOM_MOUTH)
        assert heuristics.lips_score(face) == heuristics.MISSING_LANDMARK_SCORE

    @pytest.mark.parametrize("width,height,expected", [
        (75, 100, 90.0),
        (68, 100, 85.0),
        (62, 100, 80.0),
        (100, 100, 70.0),
    ])
    def test_facial_structure_bands(self, width, height, expected):
        assert heuristics.facial_structure_score(_box_face(width, height)) == expected

    def test_skin_quality_components(self):
        bare = _box_face(100, 100)
        assert heuristics.skin_quality_score(bare) == 70.0
        tracked = dataclasses.replace(bare, tracking_id=3)
        assert heuristics.skin_quality_score(tracked) == 80.0

    def test_symmetry_secondary_band(self, frontal_face):
        landmarks = dict(frontal_face.landmarks)
        landmarks[LandmarkType.LEFT_EYE] = Point(284 + 58, 170)  # ratio 0.3625
        face = dataclasses.replace(frontal_face, landmarks=landmarks)
        assert heuristics.symmetry_score(face) == 85.0
        assert heuristics.eye_area_score(face) == 85.0

    @pytest.mark.parametrize("nose_x,expected", [(320, 95.0), (332, 90.0), (340, 85.0), (360, 80.0)])
    def test_nose_bands(self, frontal_face, nose_x, expected):
        landmarks = {**frontal_face.landmarks, LandmarkType.NOSE_BASE: Point(nose_x, 220)}
        face = dataclasses.replace(frontal_face, landmarks=landmarks)
        assert heuristics.nose_score(face) == expected


class TestOverallAnalysis:
    def test_top_tier(self):
        text = heuristics.overall_analysis(90, 90, 90, 85)
        assert text.startswith("Your face demonstrates exceptional attractiveness with ")
        assert "excellent symmetry" in text
        assert "well-proportioned facial structure" in text
        assert "clear skin quality" in text

    def test_low_tier(self):
        text = heuristics.overall_analysis(60, 70, 70, 60)
        assert text.startswith("Your face has potential with ")
        assert "moderate symmetry" in text
        assert "adequate facial structure" in text
        assert "room for skin improvement" in text

    def test_closing_sentence(self):
        assert heuristics.overall_analysis(80, 80, 80, 75).endswith(
            "Maintaining a consistent skincare routine will help preserve and enhance these features."
        )
