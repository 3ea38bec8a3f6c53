"""Temporal smoothing and neutral-pose calibration."""

from attention_engine.calibration.baseline_calibrator import Baseline, BaselineCalibrator
from attention_engine.calibration.temporal_filter import SmoothingWindow, TemporalFilter

__all__ = ["Baseline", "BaselineCalibrator", "SmoothingWindow", "TemporalFilter"]
