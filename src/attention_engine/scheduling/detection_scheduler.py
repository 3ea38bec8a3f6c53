"""
Detection Scheduler - attention classification loop

Drives one AttentionSession cycle per tick on a single asyncio event loop and
keeps the loop alive for as long as the caller wants an attention signal.

Features:
- Adaptive cadence: 100 ms while visible, 500 ms while hidden
- Drift compensation: timer overrun of the previous tick is subtracted from
  the next delay (floor 10 ms), so throttling does not compound
- Visibility changes abandon the pending wait and reschedule from now
- Pause: ticks keep coming while is_active() is False, but no work is done,
  so the detector stays loaded
- Error containment: transient teardown errors are dropped silently, any
  other failure is logged, and neither stops the loop
- Cooperative cancellation through a token; results of a cycle that was in
  flight when the loop was cancelled are discarded
- Recalibration signal and visibility changes are marshalled onto the loop,
  so session state is only touched by the loop itself

Cycle Flow:
    FrameSource.read() -> LandmarkProvider.estimate_faces() -> first face ->
    AttentionSession.process() -> render_sink(frame, face) -> on_state(state)

Usage:
    scheduler = DetectionScheduler(provider=MediaPipeFaceMeshProvider())
    handle = await scheduler.start(camera, None, print)
    ...
    handle()  # or handle.cancel()
    await handle.wait_closed()
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from attention_engine.classification.state_classifier import AttentionState
from attention_engine.errors import DetectorInitializationError, is_transient_error
from attention_engine.landmarks.types import FrameSource, LandmarkProvider, RenderSink
from attention_engine.scheduling.cancellation import CancelHandle, CancellationToken
from attention_engine.scheduling.clock import Clock, MonotonicClock
from attention_engine.scheduling.recalibration import RecalibrationSignal
from attention_engine.scheduling.visibility import VisibilityProvider, VisibilityState
from attention_engine.session import AttentionSession
from attention_engine.utils.config_sections import SchedulerConfig, load_scheduler_config

log = logging.getLogger(__name__)

StateCallback = Callable[[AttentionState], None]
ActivePredicate = Callable[[], bool]


@dataclass
class SchedulerStats:
    """Counters for one scheduler instance."""
    ticks: int = 0
    cycles: int = 0
    paused_ticks: int = 0
    not_ready_ticks: int = 0
    transient_errors: int = 0
    errors: int = 0
    discarded_results: int = 0
    visibility_reschedules: int = 0


class DetectionScheduler:
    """
    Long-lived, cancellable attention classification loop.

    Collaborators are injected so the loop runs the same way against a real
    webcam and in unit tests with a fake clock.

    Attributes:
        provider: Landmark detector (initialized on start)
        session: Smoothing/calibration state shared by all cycles
        clock: Time source for delays and drift measurement
        visibility: Foreground/background signal that selects the cadence
        recalibration: Optional broadcast signal that resets the session
        telemetry: Optional AttentionTelemetryLogger
    """

    def __init__(
        self,
        provider: LandmarkProvider,
        session: Optional[AttentionSession] = None,
        config: Optional[SchedulerConfig] = None,
        clock: Optional[Clock] = None,
        visibility: Optional[VisibilityProvider] = None,
        recalibration: Optional[RecalibrationSignal] = None,
        telemetry: Optional[Any] = None,
    ) -> None:
        self.provider = provider
        self.session = session or AttentionSession()
        self.config = config or load_scheduler_config()
        self.clock = clock or MonotonicClock()
        self.visibility = visibility or VisibilityState(visible=True)
        self.recalibration = recalibration
        self.telemetry = telemetry

        self.stats = SchedulerStats()
        self.last_face_count = 0
        self._visible = True

        self._handle: Optional[CancelHandle] = None
        self._wakeup: Optional[asyncio.Event] = None
        self._last_scheduled_at: Optional[float] = None
        self._last_delay = 0.0
        self._last_cycle_started: Optional[float] = None
        self._last_status_log: Optional[float] = None
        self._cycles_since_status = 0

    # ------------------------------------------------------------------
    # Control surface
    # ------------------------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self._handle is not None and not self._handle.cancelled

    async def start(
        self,
        frame_source: FrameSource,
        render_sink: Optional[RenderSink],
        on_state: Optional[StateCallback],
        is_active: Optional[ActivePredicate] = None,
    ) -> CancelHandle:
        """
        Initialize the detector and launch the loop.

        Args:
            frame_source: Returns the current frame or None while not ready
            render_sink: Optional overlay consumer called with (frame, face)
            on_state: Receives one AttentionState per completed cycle
            is_active: Optional predicate; False pauses classification

        Returns:
            CancelHandle that stops the loop when called

        Raises:
            DetectorInitializationError: the landmark backend failed to load
            RuntimeError: this scheduler already runs a loop
        """
        if self.is_running:
            raise RuntimeError("Detection loop already running")

        await self._initialize_provider()

        loop = asyncio.get_running_loop()
        token = CancellationToken()
        wakeup = asyncio.Event()
        self._wakeup = wakeup
        self._last_scheduled_at = None
        self._last_cycle_started = None
        self._last_status_log = self.clock.monotonic()
        self._cycles_since_status = 0

        def wake() -> None:
            # May be called from any thread, or after the loop has closed
            if not loop.is_closed():
                loop.call_soon_threadsafe(wakeup.set)

        def on_visibility_change(visible: bool) -> None:
            wake()

        def on_recalibration() -> None:
            if not loop.is_closed():
                loop.call_soon_threadsafe(self._apply_recalibration, token)

        cleanups: List[Callable[[], None]] = [self.visibility.subscribe(on_visibility_change)]
        if self.recalibration is not None:
            cleanups.append(self.recalibration.subscribe(on_recalibration))
        # Abandons the pending wait
        cleanups.append(wake)

        handle = CancelHandle(token, cleanups=cleanups)
        self._handle = handle
        handle.task = loop.create_task(
            self._run(token, frame_source, render_sink, on_state, is_active)
        )
        # Detach listeners even when the task is cancelled from outside or crashes
        handle.task.add_done_callback(lambda task: self._on_loop_done(handle, task))

        log.info(
            f"[Scheduler] Detection loop started "
            f"({'visible' if self._is_visible() else 'hidden'}, "
            f"{self._nominal_delay() * 1000:.0f} ms cadence)"
        )
        return handle

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    async def _initialize_provider(self) -> None:
        try:
            await self.provider.initialize()
        except DetectorInitializationError as err:
            log.error(f"[Scheduler] Detector initialization failed: {err}")
            raise
        except Exception as err:
            log.error(f"[Scheduler] Detector initialization failed: {err}")
            raise DetectorInitializationError(str(err)) from err

    async def _run(
        self,
        token: CancellationToken,
        frame_source: FrameSource,
        render_sink: Optional[RenderSink],
        on_state: Optional[StateCallback],
        is_active: Optional[ActivePredicate],
    ) -> None:
        try:
            while not token.cancelled:
                delay = self._next_delay()
                interrupted = await self._wait(delay)
                if token.cancelled:
                    break

                if interrupted:
                    # Visibility changed: restart timing with the new cadence
                    self._last_scheduled_at = None
                    self.stats.visibility_reschedules += 1
                    log.debug(
                        f"[Scheduler] Visibility changed, next tick in "
                        f"{self._nominal_delay() * 1000:.0f} ms"
                    )
                    continue

                await self._tick(token, frame_source, render_sink, on_state, is_active)
        finally:
            log.info(
                f"[Scheduler] Loop exited after {self.stats.cycles} cycles "
                f"({self.stats.errors} errors, {self.stats.transient_errors} transient)"
            )

    def _is_visible(self) -> bool:
        """Read the visibility provider; a failing read keeps the last known value."""
        try:
            self._visible = bool(self.visibility.is_visible())
        except Exception as err:
            self._handle_error(err)
        return self._visible

    def _nominal_delay(self) -> float:
        if self._is_visible():
            return self.config.visible_interval_ms / 1000.0
        return self.config.hidden_interval_ms / 1000.0

    def _next_delay(self) -> float:
        """Nominal delay minus the previous tick's overrun, floored."""
        nominal = self._nominal_delay()
        now = self.clock.monotonic()

        if self._last_scheduled_at is None:
            delay = nominal
        else:
            elapsed = now - self._last_scheduled_at
            overrun = max(0.0, elapsed - self._last_delay)
            delay = max(self.config.min_interval_ms / 1000.0, nominal - overrun)

        self._last_scheduled_at = now
        self._last_delay = delay
        return delay

    async def _wait(self, delay: float) -> bool:
        """Sleep for `delay`; returns True if woken early by the wakeup event."""
        wakeup = self._wakeup
        if wakeup.is_set():
            wakeup.clear()
            return True

        sleeper = asyncio.ensure_future(self.clock.sleep(delay))
        waiter = asyncio.ensure_future(wakeup.wait())
        try:
            done, _ = await asyncio.wait({sleeper, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (sleeper, waiter):
                if not task.done():
                    task.cancel()

        if waiter in done:
            wakeup.clear()
            return True
        return False

    async def _tick(
        self,
        token: CancellationToken,
        frame_source: FrameSource,
        render_sink: Optional[RenderSink],
        on_state: Optional[StateCallback],
        is_active: Optional[ActivePredicate],
    ) -> None:
        self.stats.ticks += 1

        started = self.clock.monotonic()
        try:
            if is_active is not None and not is_active():
                self.stats.paused_ticks += 1
                return

            frame = frame_source.read()
            if frame is None:
                # Video not ready yet or being torn down
                self.stats.not_ready_ticks += 1
                return

            faces = await self.provider.estimate_faces(frame)
            if token.cancelled:
                self.stats.discarded_results += 1
                return

            # Most prominent face only
            face = faces[0] if faces else None
            self.last_face_count = len(faces) if faces else 0

            state = self.session.process(face)
            self.stats.cycles += 1
            self._cycles_since_status += 1

            if render_sink is not None:
                render_sink(frame, face)
            if on_state is not None:
                on_state(state)

            self._record_cycle(state, started)
            self._maybe_log_status()
        except Exception as err:
            self._handle_error(err)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _apply_recalibration(self, token: CancellationToken) -> None:
        if not token.cancelled:
            self.session.recalibrate()

    def _on_loop_done(self, handle: CancelHandle, task: "asyncio.Task[None]") -> None:
        if not task.cancelled() and task.exception() is not None:
            log.error("[Scheduler] Detection loop crashed", exc_info=task.exception())
        handle.cancel()

    def _handle_error(self, err: Exception) -> None:
        if is_transient_error(err, self.config.transient_error_patterns):
            self.stats.transient_errors += 1
            log.debug(f"[Scheduler] Transient detection error ignored: {err}")
            return

        self.stats.errors += 1
        log.error(f"[Scheduler] Detection error: {err}", exc_info=True)
        if self.telemetry is not None:
            self.telemetry.log_error(type(err).__name__, str(err))

    def _record_cycle(self, state: AttentionState, started: float) -> None:
        now = self.clock.monotonic()
        interval_ms = None
        if self._last_cycle_started is not None:
            interval_ms = (started - self._last_cycle_started) * 1000.0
        self._last_cycle_started = started

        if self.telemetry is not None:
            self.telemetry.log_cycle(
                cycle_number=self.stats.cycles,
                state=state.state.value,
                confidence=state.confidence,
                latency_ms=(now - started) * 1000.0,
                interval_ms=interval_ms,
            )

    def _maybe_log_status(self) -> None:
        now = self.clock.monotonic()
        if now - self._last_status_log < self.config.status_log_interval_s:
            return

        log.info(
            f"[Scheduler] Face detection running: {self._cycles_since_status} frames processed, "
            f"{self.last_face_count} faces detected"
        )
        self._last_status_log = now
        self._cycles_since_status = 0
