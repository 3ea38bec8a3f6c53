"""
Attention Engine - real-time "are you looking at the screen" classification.

Turns per-frame facial landmarks into a confidence-scored attention state
(looking_at_screen, away_left/right/up/down, no_face) with moving-median
smoothing, an auto-calibrating neutral baseline, and a drift-compensated,
visibility-aware detection loop.
"""

from attention_engine.classification.state_classifier import (
    AttentionLabel,
    AttentionState,
    classify_attention,
)
from attention_engine.errors import (
    AttentionEngineError,
    DetectorInitializationError,
    FrameNotReadyError,
)
from attention_engine.landmarks.types import DetectedFace, LandmarkPoint
from attention_engine.orientation.orientation_estimator import OrientationSample, estimate_orientation
from attention_engine.scheduling import (
    CancelHandle,
    DetectionScheduler,
    RecalibrationSignal,
    VisibilityState,
)
from attention_engine.session import AttentionSession

__version__ = "1.0.0"

__all__ = [
    "AttentionEngineError",
    "AttentionLabel",
    "AttentionSession",
    "AttentionState",
    "CancelHandle",
    "DetectedFace",
    "DetectionScheduler",
    "DetectorInitializationError",
    "FrameNotReadyError",
    "LandmarkPoint",
    "OrientationSample",
    "RecalibrationSignal",
    "VisibilityState",
    "classify_attention",
    "estimate_orientation",
]
