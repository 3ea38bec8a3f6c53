"""OpenCV webcam frame source."""

from __future__ import annotations

import logging
from typing import Optional

import cv2
import numpy as np

from attention_engine.utils.config_sections import CameraConfig, load_camera_config

log = logging.getLogger(__name__)


class OpenCVCameraSource:
    """
    Frame source backed by cv2.VideoCapture.

    read() returns None while the device is closed or a grab fails, which the
    scheduler treats as "video not ready" and skips without logging.
    """

    def __init__(self, config: Optional[CameraConfig] = None) -> None:
        self.config = config or load_camera_config()
        self.capture = None
        self.frames_read = 0
        self.failed_reads = 0

    def open(self) -> None:
        if self.capture is not None:
            return

        self.capture = cv2.VideoCapture(self.config.index)
        self.capture.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.width)
        self.capture.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.height)

        if not self.capture.isOpened():
            log.warning(f"[Camera] Device {self.config.index} did not open")
        else:
            log.info(
                f"[Camera] Device {self.config.index} opened "
                f"({self.config.width}x{self.config.height})"
            )

    def read(self) -> Optional[np.ndarray]:
        if self.capture is None or not self.capture.isOpened():
            return None

        ok, frame = self.capture.read()
        if not ok or frame is None or frame.size == 0:
            self.failed_reads += 1
            return None

        self.frames_read += 1
        return frame

    def release(self) -> None:
        if self.capture is not None:
            self.capture.release()
            self.capture = None
            log.info(f"[Camera] Released after {self.frames_read} frames")

    def __enter__(self) -> "OpenCVCameraSource":
        self.open()
        return self

    def __exit__(self, *exc) -> None:
        self.release()
