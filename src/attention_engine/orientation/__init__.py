"""Landmark geometry to head orientation proxies."""

from attention_engine.orientation.orientation_estimator import (
    LANDMARK_INDICES,
    OrientationSample,
    estimate_orientation,
)

__all__ = ["LANDMARK_INDICES", "OrientationSample", "estimate_orientation"]
