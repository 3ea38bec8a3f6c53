"""Detection loop scheduling and its control signals."""

from attention_engine.scheduling.cancellation import CancelHandle, CancellationToken
from attention_engine.scheduling.clock import Clock, MonotonicClock
from attention_engine.scheduling.detection_scheduler import DetectionScheduler, SchedulerStats
from attention_engine.scheduling.recalibration import RecalibrationSignal
from attention_engine.scheduling.visibility import VisibilityProvider, VisibilityState

__all__ = [
    "CancelHandle",
    "CancellationToken",
    "Clock",
    "DetectionScheduler",
    "MonotonicClock",
    "RecalibrationSignal",
    "SchedulerStats",
    "VisibilityProvider",
    "VisibilityState",
]
