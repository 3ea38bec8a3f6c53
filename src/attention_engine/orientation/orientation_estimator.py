"""
Head orientation proxies from 2D facial landmarks.

This module turns one face's Face Mesh landmarks into normalized, explainable
head-rotation proxies (not true 3D Euler angles):

- yaw  : left/right, nose horizontal offset from the inner-eye midpoint
         divided by the outer-eye distance
- pitch: up/down, nose vertical offset from the inner-eye midpoint divided by
         max(outer-eye distance, mouth width)
- roll : head tilt, slope of the outer-eye line clamped to [-1, 1]

Both yaw and pitch are ratios, so they do not depend on how far the user sits
from the camera. Image coordinates grow downward, so positive pitch means the
nose sits below the eye line.

Landmarks Used (MediaPipe indices):
    - Left eye outer (33) / inner (133)
    - Right eye inner (362) / outer (263)
    - Nose tip (1)
    - Mouth left (61) / right (291)

Usage:
    sample = estimate_orientation(face)
    if sample.ok:
        print(f"yaw={sample.yaw:.3f} pitch={sample.pitch:.3f}")
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from attention_engine.landmarks.types import DetectedFace, LandmarkPoint
from attention_engine.utils.config import Config


@dataclass
class OrientationSample:
    """Yaw/pitch/roll triple for one cycle plus a validity flag."""
    yaw: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0
    ok: bool = True

    @classmethod
    def invalid(cls) -> "OrientationSample":
        return cls(0.0, 0.0, 0.0, ok=False)


LANDMARK_INDICES: Dict[str, int] = {
    "left_eye_outer": Config.LANDMARK_LEFT_EYE_OUTER,
    "left_eye_inner": Config.LANDMARK_LEFT_EYE_INNER,
    "right_eye_inner": Config.LANDMARK_RIGHT_EYE_INNER,
    "right_eye_outer": Config.LANDMARK_RIGHT_EYE_OUTER,
    "nose_tip": Config.LANDMARK_NOSE_TIP,
    "mouth_left": Config.LANDMARK_MOUTH_LEFT,
    "mouth_right": Config.LANDMARK_MOUTH_RIGHT,
}


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _normalize(value: float, scale: float) -> float:
    if not scale:
        return 0.0
    return value / scale


def _get_point(keypoints: Sequence[Optional[LandmarkPoint]], index: int) -> Optional[LandmarkPoint]:
    if index >= len(keypoints):
        return None
    return keypoints[index]


def _eye_slope(left_outer: LandmarkPoint, right_outer: LandmarkPoint) -> float:
    dx = right_outer.x - left_outer.x
    dy = right_outer.y - left_outer.y
    if dx == 0:
        # Vertical eye line saturates the clamp
        return math.copysign(1.0, dy) if dy != 0 else 0.0
    return _clamp(dy / dx, -1.0, 1.0)


def estimate_orientation(
    face: Optional[DetectedFace],
    min_landmarks: int = Config.MIN_LANDMARKS,
) -> OrientationSample:
    """
    Compute raw yaw/pitch/roll for one face.

    Args:
        face: Face returned by the landmark provider, or None if no face
        min_landmarks: Minimum keypoint count for a usable face

    Returns:
        OrientationSample; ok=False (all zeros) when the face is missing, has
        too few keypoints, or lacks one of the seven required points.
    """
    if face is None or face.keypoints is None or len(face.keypoints) < min_landmarks:
        return OrientationSample.invalid()

    points = {name: _get_point(face.keypoints, idx) for name, idx in LANDMARK_INDICES.items()}
    if any(point is None for point in points.values()):
        return OrientationSample.invalid()

    leo = points["left_eye_outer"]
    lei = points["left_eye_inner"]
    rei = points["right_eye_inner"]
    reo = points["right_eye_outer"]
    nose = points["nose_tip"]
    mouth_left = points["mouth_left"]
    mouth_right = points["mouth_right"]

    eye_mid_x = (lei.x + rei.x) / 2.0
    eye_mid_y = (lei.y + rei.y) / 2.0

    # Outer eye corners stay stable under small expressions
    face_width = math.hypot(reo.x - leo.x, reo.y - leo.y)
    mouth_width = math.hypot(mouth_right.x - mouth_left.x, mouth_right.y - mouth_left.y)
    face_scale = max(face_width, mouth_width)

    dx = nose.x - eye_mid_x  # right positive
    dy = nose.y - eye_mid_y  # down positive

    return OrientationSample(
        yaw=_normalize(dx, face_width),
        pitch=_normalize(dy, face_scale),
        roll=_eye_slope(leo, reo),
        ok=True,
    )
