"""Landmark types and external collaborator adapters."""

from attention_engine.landmarks.types import (
    DetectedFace,
    FrameSource,
    LandmarkPoint,
    LandmarkProvider,
    RenderSink,
)

__all__ = [
    "DetectedFace",
    "FrameSource",
    "LandmarkPoint",
    "LandmarkProvider",
    "RenderSink",
]
