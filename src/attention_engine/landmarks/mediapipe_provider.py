"""
MediaPipe Face Mesh landmark provider.

Wraps mp.solutions.face_mesh behind the asynchronous LandmarkProvider
interface used by the detection scheduler:

- initialize(): imports mediapipe and builds the FaceMesh graph (fatal if
  either fails, so a missing [mediapipe] extra surfaces here)
- estimate_faces(frame): BGR frame -> list of DetectedFace with 468 keypoints
  in pixel coordinates, optionally mirrored horizontally
- close(): releases the graph

Inference runs in a worker thread (asyncio.to_thread) so the event loop keeps
serving visibility and recalibration signals. Cycles are serialized by the
scheduler, so the graph is never used concurrently.

Usage:
    provider = MediaPipeFaceMeshProvider()
    await provider.initialize()
    faces = await provider.estimate_faces(frame)
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional

import cv2
import numpy as np

from attention_engine.errors import DetectorInitializationError, FrameNotReadyError
from attention_engine.landmarks.types import DetectedFace, LandmarkPoint
from attention_engine.utils.config_sections import FaceMeshConfig, load_face_mesh_config

log = logging.getLogger(__name__)


def load_face_mesh_module() -> Any:
    """Import mp.solutions.face_mesh; mediapipe ships as the [mediapipe] extra."""
    import mediapipe as mp

    return mp.solutions.face_mesh


class MediaPipeFaceMeshProvider:
    """Landmark provider backed by MediaPipe Face Mesh."""

    def __init__(self, config: Optional[FaceMeshConfig] = None) -> None:
        self.config = config or load_face_mesh_config()
        self._face_mesh: Optional[Any] = None

    @property
    def is_initialized(self) -> bool:
        return self._face_mesh is not None

    async def initialize(self) -> None:
        if self._face_mesh is not None:
            return

        try:
            face_mesh = load_face_mesh_module()
            self._face_mesh = face_mesh.FaceMesh(
                static_image_mode=False,
                max_num_faces=self.config.max_num_faces,
                refine_landmarks=self.config.refine_landmarks,
                min_detection_confidence=self.config.min_detection_confidence,
                min_tracking_confidence=self.config.min_tracking_confidence,
            )
        except Exception as err:
            raise DetectorInitializationError(f"Face Mesh could not be created: {err}") from err

        log.info(
            f"[FaceMesh] Ready (max_faces={self.config.max_num_faces}, "
            f"refine={self.config.refine_landmarks}, flip={self.config.flip_horizontal})"
        )

    async def estimate_faces(self, frame: np.ndarray) -> List[DetectedFace]:
        if self._face_mesh is None:
            raise RuntimeError("Face Mesh provider used before initialize()")

        if frame is None or frame.size == 0 or frame.shape[0] == 0 or frame.shape[1] == 0:
            raise FrameNotReadyError("Frame has 0x0 size")

        height, width = frame.shape[:2]
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        results = await asyncio.to_thread(self._face_mesh.process, rgb)

        faces: List[DetectedFace] = []
        for face_landmarks in results.multi_face_landmarks or []:
            faces.append(self._to_face(face_landmarks, width, height))
        return faces

    def _to_face(self, face_landmarks, width: int, height: int) -> DetectedFace:
        """Convert normalized Face Mesh landmarks to pixel keypoints."""
        flip = self.config.flip_horizontal
        keypoints = []
        for lm in face_landmarks.landmark:
            x = (1.0 - lm.x) * width if flip else lm.x * width
            keypoints.append(LandmarkPoint(x=x, y=lm.y * height, z=lm.z * width))
        return DetectedFace(keypoints=keypoints)

    def close(self) -> None:
        if self._face_mesh is not None:
            self._face_mesh.close()
            self._face_mesh = None
            log.info("[FaceMesh] Closed")
