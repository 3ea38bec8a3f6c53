"""
Auto-calibrating neutral head pose.

During warm-up (the first `warmup_frames` valid cycles after start or after a
recalibration) the baseline follows the smoothed signal with an exponential
blend:

    baseline = retain * baseline + (1 - retain) * smoothed

After warm-up the baseline is frozen. Every smoothed sample is reported
relative to it, so the user's natural posture reads as zero.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from attention_engine.orientation.orientation_estimator import OrientationSample

log = logging.getLogger(__name__)


@dataclass
class Baseline:
    """Neutral pose offsets subtracted before classification."""
    yaw: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0


class BaselineCalibrator:
    """Tracks the warm-up baseline and zero-centers smoothed samples."""

    def __init__(self, warmup_frames: int = 30, retain_weight: float = 0.8) -> None:
        self.warmup_frames = warmup_frames
        self.retain_weight = retain_weight
        self.baseline = Baseline()
        self.frames_seen = 0

    @property
    def is_warming_up(self) -> bool:
        return self.frames_seen < self.warmup_frames

    def update(self, smoothed: OrientationSample) -> OrientationSample:
        """Blend the baseline while warming up, then return smoothed - baseline."""
        self.frames_seen += 1

        if self.frames_seen <= self.warmup_frames:
            keep = self.retain_weight
            take = 1.0 - keep
            self.baseline.yaw = keep * self.baseline.yaw + take * smoothed.yaw
            self.baseline.pitch = keep * self.baseline.pitch + take * smoothed.pitch
            self.baseline.roll = keep * self.baseline.roll + take * smoothed.roll

            if self.frames_seen == self.warmup_frames:
                log.debug(
                    f"[Calibration] Baseline frozen: yaw={self.baseline.yaw:.3f} "
                    f"pitch={self.baseline.pitch:.3f} roll={self.baseline.roll:.3f}"
                )

        return OrientationSample(
            yaw=smoothed.yaw - self.baseline.yaw,
            pitch=smoothed.pitch - self.baseline.pitch,
            roll=smoothed.roll - self.baseline.roll,
            ok=smoothed.ok,
        )

    def reset(self) -> None:
        """Zero the baseline and re-enter warm-up."""
        self.baseline = Baseline()
        self.frames_seen = 0
