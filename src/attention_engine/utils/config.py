"""
Centralized configuration for the Attention Engine.

This module provides all configuration constants for:
- Landmark validation (MediaPipe Face Mesh indices)
- Temporal smoothing and baseline calibration
- Attention state classification thresholds
- Detection scheduling cadence and error filtering
- Face Mesh / camera adapters
- Telemetry

The Config class contains all constants as class attributes, making them
accessible throughout the application without instantiation.

Usage:
    from attention_engine.utils.config import Config

    window = Config.SMOOTHING_WINDOW
    if Config.TELEMETRY_ENABLED:
        # Write per-cycle metrics
"""


class Config:
    """System configuration constants for the Attention Engine."""

    # ==========================================================================
    # LANDMARKS: Minimal landmark set for a usable face
    # ==========================================================================

    MIN_LANDMARKS = 400                 # Face Mesh returns 468 (478 with irises)

    # MediaPipe Face Mesh indices
    LANDMARK_LEFT_EYE_OUTER = 33
    LANDMARK_LEFT_EYE_INNER = 133
    LANDMARK_RIGHT_EYE_INNER = 362
    LANDMARK_RIGHT_EYE_OUTER = 263
    LANDMARK_NOSE_TIP = 1
    LANDMARK_MOUTH_LEFT = 61
    LANDMARK_MOUTH_RIGHT = 291

    # ==========================================================================
    # CALIBRATION: Moving median + warm-up baseline
    # ==========================================================================

    SMOOTHING_WINDOW = 10               # Moving median length per axis
    BASELINE_WARMUP_FRAMES = 30         # Valid frames used to auto-calibrate
    BASELINE_RETAIN_WEIGHT = 0.8        # baseline = 0.8 * baseline + 0.2 * sample

    # ==========================================================================
    # CLASSIFICATION: Dead zones and away thresholds (normalized units)
    # ==========================================================================

    DEAD_ZONE_YAW = 0.06
    DEAD_ZONE_PITCH = 0.05
    YAW_AWAY_THRESHOLD = 0.14           # Beyond this => away_left / away_right
    PITCH_UP_THRESHOLD = 0.10           # pitch < -0.10 => away_up
    PITCH_DOWN_THRESHOLD = 0.10         # pitch > 0.10 => away_down

    CONFIDENCE_SLOPE = 3.0
    CONFIDENCE_AWAY_BASE = 0.7
    CONFIDENCE_CENTERED = 0.9
    CONFIDENCE_AMBIGUOUS = 0.7          # Intermediate poses still count as on-screen

    # ==========================================================================
    # SCHEDULER: Cadence, drift compensation, error filtering
    # ==========================================================================

    VISIBLE_INTERVAL_MS = 100           # Page/window in foreground
    HIDDEN_INTERVAL_MS = 500            # Page/window in background
    MIN_INTERVAL_MS = 10                # Floor after drift compensation
    STATUS_LOG_INTERVAL_S = 5.0         # Periodic "still running" log line

    # Raised while the video source is torn down (zero-sized textures)
    TRANSIENT_ERROR_PATTERNS = ("texture size", "0x0")

    # ==========================================================================
    # FACE MESH: MediaPipe landmark provider
    # ==========================================================================

    FACE_MESH_MAX_FACES = 1
    FACE_MESH_REFINE_LANDMARKS = False
    FACE_MESH_MIN_DETECTION_CONFIDENCE = 0.5
    FACE_MESH_MIN_TRACKING_CONFIDENCE = 0.5
    FACE_MESH_FLIP_HORIZONTAL = True    # Mirror like a selfie preview

    # ==========================================================================
    # CAMERA: OpenCV frame source
    # ==========================================================================

    CAMERA_INDEX = 0
    CAMERA_WIDTH = 640
    CAMERA_HEIGHT = 480

    # ==========================================================================
    # TELEMETRY
    # ==========================================================================

    TELEMETRY_ENABLED = False
    TELEMETRY_DIR = "logs"
