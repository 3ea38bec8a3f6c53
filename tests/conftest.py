"""Shared fixtures: synthetic Face Mesh faces and a virtual clock."""

from __future__ import annotations

import asyncio
from typing import Callable, List, Optional, Tuple

import pytest

from attention_engine.landmarks.types import DetectedFace, LandmarkPoint
from attention_engine.orientation.orientation_estimator import LANDMARK_INDICES

Point = Tuple[float, float]

# Scenario geometry: outer eye corners 40 px apart, inner-eye midpoint at (100, 100)
NEUTRAL_POINTS = {
    "left_eye_outer": (80.0, 100.0),
    "left_eye_inner": (95.0, 100.0),
    "right_eye_inner": (105.0, 100.0),
    "right_eye_outer": (120.0, 100.0),
    "nose_tip": (100.0, 100.0),
    "mouth_left": (90.0, 130.0),
    "mouth_right": (110.0, 130.0),
}
FACE_WIDTH = 40.0


def build_face(count: int = 468, **overrides: Optional[Point]) -> DetectedFace:
    """Face with `count` keypoints; named roles can be moved or set to None."""
    keypoints: List[Optional[LandmarkPoint]] = [LandmarkPoint(0.0, 0.0) for _ in range(count)]
    points = dict(NEUTRAL_POINTS)
    points.update(overrides)
    for name, index in LANDMARK_INDICES.items():
        if index >= count:
            continue
        value = points[name]
        keypoints[index] = None if value is None else LandmarkPoint(value[0], value[1])
    return DetectedFace(keypoints=keypoints)


def build_pose_face(yaw: float = 0.0, pitch: float = 0.0) -> DetectedFace:
    """Face whose raw yaw/pitch equal the given values (face scale = 40 px)."""
    return build_face(nose_tip=(100.0 + yaw * FACE_WIDTH, 100.0 + pitch * FACE_WIDTH))


@pytest.fixture()
def make_face() -> Callable[..., DetectedFace]:
    return build_face


@pytest.fixture()
def make_pose_face() -> Callable[..., DetectedFace]:
    return build_pose_face


class FakeClock:
    """
    Virtual time for the scheduler.

    sleep() advances time by the requested delay plus optional jitter and
    yields once to the event loop, so loops run as fast as the CPU allows.
    """

    def __init__(self, jitter: Optional[Callable[[], float]] = None) -> None:
        self.now = 0.0
        self.sleeps: List[float] = []
        self.jitter = jitter
        self.on_sleep: Optional[Callable[[int], None]] = None

    def monotonic(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds + (self.jitter() if self.jitter else 0.0)
        if self.on_sleep is not None:
            self.on_sleep(len(self.sleeps))
        await asyncio.sleep(0)


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()
