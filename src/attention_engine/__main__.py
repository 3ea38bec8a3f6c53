"""
Webcam attention tracker.

Runs the detection loop against the default webcam with MediaPipe Face Mesh
and prints every attention state change.

Controls:
    - Ctrl+C: clean exit
    - SIGUSR1: recalibrate the neutral pose
    - SIGUSR2: toggle visible/hidden cadence

Usage:
    python -m attention_engine --camera 0 --telemetry
"""

import argparse
import asyncio
import logging
import signal
from pathlib import Path
from typing import Optional

from attention_engine.classification.state_classifier import AttentionLabel, AttentionState
from attention_engine.errors import DetectorInitializationError
from attention_engine.landmarks.camera_source import OpenCVCameraSource
from attention_engine.landmarks.mediapipe_provider import MediaPipeFaceMeshProvider
from attention_engine.scheduling.detection_scheduler import DetectionScheduler
from attention_engine.scheduling.recalibration import RecalibrationSignal
from attention_engine.scheduling.visibility import VisibilityState
from attention_engine.session import AttentionSession
from attention_engine.telemetry.loggers.session_logger import get_session_logger
from attention_engine.telemetry.telemetry_logger import AttentionTelemetryLogger
from attention_engine.utils.config_sections import CameraConfig, load_camera_config, load_telemetry_config

log = logging.getLogger("attention_engine.cli")


def parse_args(argv=None):
    defaults = load_camera_config()
    ap = argparse.ArgumentParser(description="Real-time attention tracker (webcam + Face Mesh)")
    ap.add_argument("--camera", type=int, default=defaults.index, help="OpenCV camera index")
    ap.add_argument("--width", type=int, default=defaults.width, help="Capture width")
    ap.add_argument("--height", type=int, default=defaults.height, help="Capture height")
    ap.add_argument("--hidden", action="store_true", help="Start with the background cadence")
    ap.add_argument("--duration", type=float, default=None, help="Stop after N seconds")
    ap.add_argument("--telemetry", action="store_true", help="Write per-cycle JSONL telemetry")
    ap.add_argument("--log-dir", default=load_telemetry_config().output_dir, help="Base directory for logs")
    ap.add_argument("--verbose", action="store_true", help="Echo INFO logs to the console")
    return ap.parse_args(argv)


class StatePrinter:
    """Prints a line whenever the attention label changes."""

    def __init__(self) -> None:
        self.last_label: Optional[AttentionLabel] = None
        self.changes = 0

    def __call__(self, state: AttentionState) -> None:
        if state.state == self.last_label:
            return
        self.last_label = state.state
        self.changes += 1
        print(
            f"[STATE] {state.state.value:<18} conf={state.confidence:.2f} "
            f"yaw={state.yaw:+.3f} pitch={state.pitch:+.3f} roll={state.roll:+.3f}"
        )


async def run(args) -> int:
    telemetry = AttentionTelemetryLogger(output_dir=Path(args.log_dir)) if args.telemetry else None
    session_dir = telemetry.get_session_dir() if telemetry is not None else None
    session_log = get_session_logger(
        session_dir=session_dir,
        console_level=logging.INFO if args.verbose else logging.WARNING,
    )

    visibility = VisibilityState(visible=not args.hidden)
    recalibration = RecalibrationSignal()
    provider = MediaPipeFaceMeshProvider()
    scheduler = DetectionScheduler(
        provider=provider,
        session=AttentionSession(),
        visibility=visibility,
        recalibration=recalibration,
        telemetry=telemetry,
    )
    printer = StatePrinter()
    camera = OpenCVCameraSource(CameraConfig(index=args.camera, width=args.width, height=args.height))
    stop_event = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig, action in (
        (signal.SIGINT, stop_event.set),
        (getattr(signal, "SIGUSR1", None), recalibration.emit),
        (getattr(signal, "SIGUSR2", None), visibility.toggle),
    ):
        if sig is None:
            continue
        try:
            loop.add_signal_handler(sig, action)
        except NotImplementedError:
            # Windows event loops have no signal handlers
            log.debug(f"[CLI] Signal {sig} not supported on this platform")

    print("=" * 60)
    print("ATTENTION TRACKER".center(60))
    print(f"Camera {args.camera} @ {args.width}x{args.height}".center(60))
    print("=" * 60)

    try:
        with camera:
            try:
                handle = await scheduler.start(camera, None, printer)
            except DetectorInitializationError as err:
                print(f"[ERROR] Face detector unavailable: {err}")
                return 1

            try:
                if args.duration is not None:
                    try:
                        await asyncio.wait_for(stop_event.wait(), timeout=args.duration)
                    except asyncio.TimeoutError:
                        pass
                else:
                    await stop_event.wait()
            finally:
                print("\n[INFO] Stopping, closing cleanly...")
                handle.cancel()
                await handle.wait_closed()
                provider.close()

        stats = scheduler.stats
        print(f"[INFO] {stats.cycles} cycles, {printer.changes} state changes, {stats.errors} errors")
        if telemetry is not None:
            summary = telemetry.finalize_session()
            print(f"[INFO] Telemetry: {telemetry.get_session_dir()} (avg interval {summary['avg_interval_ms']:.0f} ms)")
        return 0
    finally:
        session_log.close()


def main(argv=None) -> int:
    args = parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    raise SystemExit(main())
