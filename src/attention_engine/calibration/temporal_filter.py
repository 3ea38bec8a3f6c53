"""
Moving-median smoothing of orientation samples.

Each axis keeps its own bounded window of recent raw values (oldest evicted
first) and reports the median. A median rejects single-frame outliers such
as fast blinks or a transient misdetection without any explicit outlier
logic.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, List

import numpy as np

from attention_engine.orientation.orientation_estimator import OrientationSample


class SmoothingWindow:
    """Bounded FIFO of recent values for one axis."""

    def __init__(self, size: int = 10) -> None:
        if size < 1:
            raise ValueError(f"Smoothing window size must be >= 1, got {size}")
        self.size = size
        self._values: Deque[float] = deque(maxlen=size)

    def push(self, value: float) -> None:
        self._values.append(float(value))

    def median(self) -> float:
        """Median of the window (mean of the two middle values when even)."""
        if not self._values:
            return 0.0
        return float(np.median(self._values))

    def clear(self) -> None:
        self._values.clear()

    def values(self) -> List[float]:
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)


class TemporalFilter:
    """Per-axis moving median over the last `window_size` samples."""

    def __init__(self, window_size: int = 10) -> None:
        self.yaw = SmoothingWindow(window_size)
        self.pitch = SmoothingWindow(window_size)
        self.roll = SmoothingWindow(window_size)

    def push(self, sample: OrientationSample) -> OrientationSample:
        """Add a raw sample and return the smoothed one."""
        self.yaw.push(sample.yaw)
        self.pitch.push(sample.pitch)
        self.roll.push(sample.roll)

        return OrientationSample(
            yaw=self.yaw.median(),
            pitch=self.pitch.median(),
            roll=self.roll.median(),
            ok=sample.ok,
        )

    def clear(self) -> None:
        self.yaw.clear()
        self.pitch.clear()
        self.roll.clear()
