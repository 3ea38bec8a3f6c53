"""Tests for the attention state decision rules."""

from __future__ import annotations

import pytest

from attention_engine.classification.state_classifier import (
    AttentionLabel,
    AttentionState,
    classify_attention,
)
from attention_engine.orientation.orientation_estimator import OrientationSample
from attention_engine.utils.config_sections import ClassifierConfig


def classify(yaw: float = 0.0, pitch: float = 0.0, roll: float = 0.0, ok: bool = True) -> AttentionState:
    return classify_attention(OrientationSample(yaw=yaw, pitch=pitch, roll=roll), ok=ok)


def test_invalid_sample_is_no_face_with_zeros() -> None:
    state = classify(yaw=0.5, pitch=-0.3, roll=0.2, ok=False)

    assert state.state is AttentionLabel.NO_FACE
    assert state.confidence == 0.0
    assert (state.yaw, state.pitch, state.roll) == (0.0, 0.0, 0.0)


def test_validity_defaults_to_sample_flag() -> None:
    state = classify_attention(OrientationSample.invalid())

    assert state.state is AttentionLabel.NO_FACE


def test_dead_zone_is_looking_at_screen_high_confidence() -> None:
    state = classify(yaw=0.03, pitch=-0.02, roll=0.1)

    assert state.state is AttentionLabel.LOOKING_AT_SCREEN
    assert state.confidence == pytest.approx(0.9)
    assert state.roll == pytest.approx(0.1)


def test_yaw_beyond_threshold_is_away_right() -> None:
    state = classify(yaw=0.20)

    assert state.state is AttentionLabel.AWAY_RIGHT
    assert state.confidence == pytest.approx(0.88)


def test_negative_yaw_is_away_left() -> None:
    state = classify(yaw=-0.20)

    assert state.state is AttentionLabel.AWAY_LEFT
    assert state.confidence == pytest.approx(0.88)


def test_confidence_increases_with_yaw_until_ceiling() -> None:
    yaws = [0.141, 0.15, 0.18, 0.20, 0.22, 0.24]
    confidences = [classify(yaw=y).confidence for y in yaws]

    assert all(later > earlier for earlier, later in zip(confidences, confidences[1:]))
    assert classify(yaw=0.5).confidence == 1.0
    assert classify(yaw=3.0).confidence == 1.0


def test_pitch_up_is_away_up() -> None:
    state = classify(pitch=-0.12)

    assert state.state is AttentionLabel.AWAY_UP
    assert state.confidence == pytest.approx(0.76)


def test_pitch_down_is_away_down() -> None:
    state = classify(pitch=0.15)

    assert state.state is AttentionLabel.AWAY_DOWN
    assert state.confidence == pytest.approx(0.85)


def test_pitch_confidence_is_clamped() -> None:
    assert classify(pitch=-0.6).confidence == 1.0


def test_yaw_takes_priority_over_pitch() -> None:
    state = classify(yaw=0.2, pitch=0.3)

    assert state.state is AttentionLabel.AWAY_RIGHT


@pytest.mark.parametrize("yaw,pitch", [(0.10, 0.0), (-0.08, 0.02), (0.0, 0.07), (0.0, -0.09), (0.1, 0.1)])
def test_intermediate_pose_falls_back_to_looking_at_screen(yaw: float, pitch: float) -> None:
    state = classify(yaw=yaw, pitch=pitch)

    assert state.state is AttentionLabel.LOOKING_AT_SCREEN
    assert state.confidence == pytest.approx(0.7)


def test_confidence_always_within_unit_interval() -> None:
    for yaw in [-2.0, -0.3, -0.1, 0.0, 0.1, 0.3, 2.0]:
        for pitch in [-2.0, -0.2, 0.0, 0.2, 2.0]:
            confidence = classify(yaw=yaw, pitch=pitch).confidence
            assert 0.0 <= confidence <= 1.0


def test_custom_thresholds() -> None:
    strict = ClassifierConfig(yaw_away_threshold=0.05, dead_zone_yaw=0.02)

    state = classify_attention(OrientationSample(yaw=0.08), config=strict)

    assert state.state is AttentionLabel.AWAY_RIGHT
    assert state.confidence == pytest.approx(0.79)


def test_to_dict_uses_label_values() -> None:
    payload = classify(yaw=0.2, pitch=0.01, roll=-0.05).to_dict()

    assert payload["state"] == "away_right"
    assert set(payload) == {"state", "confidence", "yaw", "pitch", "roll"}
