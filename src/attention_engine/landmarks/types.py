"""
Landmark data types and collaborator protocols.

The landmark detector and the video source are external to the engine. This
module defines what the engine expects from them:

- LandmarkPoint / DetectedFace: one face as an ordered list of keypoints in
  pixel coordinates (optional depth), indexed positionally
- FrameSource: returns the current frame, or None while the source is not ready
- LandmarkProvider: asynchronous detector returning zero or more faces
- RenderSink: optional consumer of (frame, face) for overlays
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol, Sequence


@dataclass
class LandmarkPoint:
    """Single tracked facial point."""
    x: float
    y: float
    z: float = 0.0


@dataclass
class DetectedFace:
    """One face returned by the landmark provider."""
    keypoints: List[Optional[LandmarkPoint]] = field(default_factory=list)
    score: Optional[float] = None

    def __len__(self) -> int:
        return len(self.keypoints)


class FrameSource(Protocol):
    def read(self) -> Optional[Any]:
        """Return the current frame or None if the source is not ready."""
        ...


class LandmarkProvider(Protocol):
    async def initialize(self) -> None:
        """Load the detection backend. Failures are fatal for the scheduler."""
        ...

    async def estimate_faces(self, frame: Any) -> Sequence[DetectedFace]:
        ...

    def close(self) -> None:
        ...


class RenderSink(Protocol):
    def __call__(self, frame: Any, face: Optional[DetectedFace]) -> None:
        ...
