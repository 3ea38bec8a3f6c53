"""
Per-user tracking session.

An AttentionSession owns the only state that survives between cycles: the
smoothing windows and the calibrated baseline. One cycle runs

    landmarks -> orientation -> moving median -> baseline -> classifier

Sessions are independent of each other, so several can run side by side
(e.g. one per camera) and tests can build a fresh one per case.

Usage:
    session = AttentionSession()
    state = session.process(face)
    session.recalibrate()  # user changed posture
"""

from __future__ import annotations

import logging
from typing import Optional

from attention_engine.calibration.baseline_calibrator import BaselineCalibrator
from attention_engine.calibration.temporal_filter import TemporalFilter
from attention_engine.classification.state_classifier import AttentionState, classify_attention
from attention_engine.landmarks.types import DetectedFace
from attention_engine.orientation.orientation_estimator import estimate_orientation
from attention_engine.utils.config import Config
from attention_engine.utils.config_sections import (
    CalibrationConfig,
    ClassifierConfig,
    load_calibration_config,
    load_classifier_config,
)

log = logging.getLogger(__name__)


class AttentionSession:
    """Smoothing + calibration state for one tracking session."""

    def __init__(
        self,
        calibration_config: Optional[CalibrationConfig] = None,
        classifier_config: Optional[ClassifierConfig] = None,
        min_landmarks: Optional[int] = None,
    ) -> None:
        self.calibration_config = calibration_config or load_calibration_config()
        self.classifier_config = classifier_config or load_classifier_config()
        self.min_landmarks = min_landmarks if min_landmarks is not None else Config.MIN_LANDMARKS

        self.filter = TemporalFilter(self.calibration_config.smoothing_window)
        self.calibrator = BaselineCalibrator(
            warmup_frames=self.calibration_config.warmup_frames,
            retain_weight=self.calibration_config.retain_weight,
        )

        self.cycles = 0
        self.valid_cycles = 0
        self.recalibrations = 0
        self.last_state: Optional[AttentionState] = None

    @property
    def is_calibrating(self) -> bool:
        return self.calibrator.is_warming_up

    def process(self, face: Optional[DetectedFace]) -> AttentionState:
        """Run one classification cycle for the chosen face (or None)."""
        self.cycles += 1
        raw = estimate_orientation(face, min_landmarks=self.min_landmarks)

        if not raw.ok:
            # Invalid frames leave windows and baseline untouched
            state = AttentionState.no_face()
        else:
            self.valid_cycles += 1
            smoothed = self.filter.push(raw)
            centered = self.calibrator.update(smoothed)
            state = classify_attention(centered, ok=True, config=self.classifier_config)

        self.last_state = state
        return state

    def recalibrate(self) -> None:
        """Forget the baseline and smoothing history; warm-up starts over."""
        self.filter.clear()
        self.calibrator.reset()
        self.recalibrations += 1
        log.info(f"[Session] Recalibration #{self.recalibrations} requested, warm-up restarted")
