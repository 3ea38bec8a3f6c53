"""
Attention state classification from zero-centered head orientation.

Pure decision function: all temporal memory lives in the calibration
package. Rules, in priority order:

1. invalid face                         -> no_face, 0.0
2. |yaw| > yaw_away_threshold           -> away_right / away_left
3. pitch < -pitch_up_threshold          -> away_up
4. pitch > pitch_down_threshold         -> away_down
5. |yaw|, |pitch| inside dead zones     -> looking_at_screen, 0.9
6. anything in between                  -> looking_at_screen, 0.7

Away confidence grows linearly with the distance past the threshold:
    clamp((|value| - threshold) * slope + base, 0, 1)

Rule 6 keeps ambiguous intermediate poses on-screen at reduced confidence
instead of introducing an "uncertain" state.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from attention_engine.orientation.orientation_estimator import OrientationSample
from attention_engine.utils.config_sections import ClassifierConfig


class AttentionLabel(str, Enum):
    LOOKING_AT_SCREEN = "looking_at_screen"
    AWAY_LEFT = "away_left"
    AWAY_RIGHT = "away_right"
    AWAY_UP = "away_up"
    AWAY_DOWN = "away_down"
    NO_FACE = "no_face"


@dataclass
class AttentionState:
    """Classifier output for one cycle."""
    state: AttentionLabel
    confidence: float
    yaw: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0

    @classmethod
    def no_face(cls) -> "AttentionState":
        return cls(AttentionLabel.NO_FACE, 0.0, 0.0, 0.0, 0.0)

    @property
    def is_looking_at_screen(self) -> bool:
        return self.state is AttentionLabel.LOOKING_AT_SCREEN

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "confidence": self.confidence,
            "yaw": self.yaw,
            "pitch": self.pitch,
            "roll": self.roll,
        }


_DEFAULT_CONFIG = ClassifierConfig()


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _away_confidence(magnitude: float, threshold: float, config: ClassifierConfig) -> float:
    return _clamp((magnitude - threshold) * config.confidence_slope + config.confidence_away_base)


def classify_attention(
    sample: OrientationSample,
    ok: Optional[bool] = None,
    config: Optional[ClassifierConfig] = None,
) -> AttentionState:
    """
    Classify one zero-centered orientation sample.

    Args:
        sample: Zero-centered yaw/pitch/roll
        ok: Validity flag from the orientation estimator (defaults to sample.ok)
        config: Thresholds; library defaults when omitted

    Returns:
        AttentionState with confidence in [0, 1]
    """
    cfg = config or _DEFAULT_CONFIG
    valid = sample.ok if ok is None else ok
    if not valid:
        return AttentionState.no_face()

    yaw, pitch, roll = sample.yaw, sample.pitch, sample.roll
    abs_yaw = abs(yaw)
    abs_pitch = abs(pitch)

    # Horizontal first: large yaw reads as the most obvious "away"
    if abs_yaw > cfg.yaw_away_threshold:
        label = AttentionLabel.AWAY_RIGHT if yaw > 0 else AttentionLabel.AWAY_LEFT
        confidence = _away_confidence(abs_yaw, cfg.yaw_away_threshold, cfg)
    elif pitch < -cfg.pitch_up_threshold and abs_pitch > cfg.dead_zone_pitch:
        label = AttentionLabel.AWAY_UP
        confidence = _away_confidence(abs_pitch, cfg.pitch_up_threshold, cfg)
    elif pitch > cfg.pitch_down_threshold and abs_pitch > cfg.dead_zone_pitch:
        label = AttentionLabel.AWAY_DOWN
        confidence = _away_confidence(abs_pitch, cfg.pitch_down_threshold, cfg)
    elif abs_yaw < cfg.dead_zone_yaw and abs_pitch < cfg.dead_zone_pitch:
        label = AttentionLabel.LOOKING_AT_SCREEN
        confidence = cfg.confidence_centered
    else:
        label = AttentionLabel.LOOKING_AT_SCREEN
        confidence = cfg.confidence_ambiguous

    return AttentionState(label, _clamp(confidence), yaw, pitch, roll)
