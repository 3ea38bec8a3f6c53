"""Centralized telemetry - per-cycle attention metrics for offline analysis."""

import json
import threading
import time
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class CycleMetric:
    """Metrics for one classification cycle."""
    timestamp: float
    cycle_number: int
    state: str
    confidence: float
    latency_ms: float
    interval_ms: Optional[float] = None  # None for the first cycle


class AttentionTelemetryLogger:
    """
    Thread-safe JSONL logger for detection loop metrics.
    - Cycles: state, confidence, latency, interval between cycles
    - System: session start/end, unexpected errors

    These files are diagnostics for one run; nothing is read back on restart.
    """

    def __init__(self, output_dir: Optional[Path] = None):
        """
        Start a new telemetry session.

        Args:
            output_dir: Base directory for sessions (default: logs/)
        """
        self._write_lock = threading.Lock()
        self._buffer_lock = threading.Lock()

        base_dir = Path(output_dir) if output_dir is not None else Path("logs")
        base_dir.mkdir(parents=True, exist_ok=True)

        self.session_timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        self.session_start = time.time()
        self.output_dir = base_dir / f"session_{self.session_timestamp}"
        self.output_dir.mkdir(parents=True, exist_ok=True)

        self.cycles_log = self.output_dir / "cycles.jsonl"
        self.system_log = self.output_dir / "system.jsonl"

        self.cycle_buffer: List[CycleMetric] = []
        self.error_count = 0

        self._log_system_event("session_start", {
            "session": self.session_timestamp,
            "timestamp": self.session_start,
        })

    def get_session_dir(self) -> Path:
        """Return the session directory path for use by other loggers."""
        return self.output_dir

    # ------------------------------------------------------------------
    # Cycle Metrics
    # ------------------------------------------------------------------

    def log_cycle(
        self,
        cycle_number: int,
        state: str,
        confidence: float,
        latency_ms: float,
        interval_ms: Optional[float] = None,
    ) -> None:
        """
        Record one completed classification cycle.

        Args:
            cycle_number: Sequential cycle number within the loop
            state: Attention label ("looking_at_screen", "away_left", ...)
            confidence: Classifier confidence (0.0-1.0)
            latency_ms: Time from frame read to callback return
            interval_ms: Time since the previous cycle started

        Thread-safe: may be called from any thread.
        """
        metric = CycleMetric(
            timestamp=time.time(),
            cycle_number=cycle_number,
            state=state,
            confidence=confidence,
            latency_ms=latency_ms,
            interval_ms=interval_ms,
        )

        with self._buffer_lock:
            self.cycle_buffer.append(metric)

        self._write_jsonl(self.cycles_log, asdict(metric))

    # ------------------------------------------------------------------
    # System Events
    # ------------------------------------------------------------------

    def _log_system_event(self, event_type: str, data: Dict[str, Any]) -> None:
        payload = {
            "timestamp": time.time(),
            "session": self.session_timestamp,
            "event_type": event_type,
            **data,
        }
        self._write_jsonl(self.system_log, payload)

    def log_error(self, error_type: str, message: str, **kwargs: Any) -> None:
        """Record an unexpected loop error."""
        with self._buffer_lock:
            self.error_count += 1
        self._log_system_event("error", {
            "error_type": error_type,
            "message": message,
            **kwargs,
        })

    # ------------------------------------------------------------------
    # Summaries
    # ------------------------------------------------------------------

    def get_cycle_summary(self) -> Dict[str, Any]:
        """
        Aggregate statistics over the cycles logged so far.

        Thread-safe: may be called from any thread.
        """
        with self._buffer_lock:
            cycles = list(self.cycle_buffer)

        by_state: Dict[str, int] = {}
        for metric in cycles:
            by_state[metric.state] = by_state.get(metric.state, 0) + 1

        latencies = [m.latency_ms for m in cycles]
        intervals = [m.interval_ms for m in cycles if m.interval_ms is not None]
        total = len(cycles)

        return {
            "total_cycles": total,
            "by_state": by_state,
            "no_face_ratio": by_state.get("no_face", 0) / total if total else 0.0,
            "avg_confidence": sum(m.confidence for m in cycles) / total if total else 0.0,
            "avg_latency_ms": sum(latencies) / len(latencies) if latencies else 0.0,
            "max_latency_ms": max(latencies) if latencies else 0.0,
            "avg_interval_ms": sum(intervals) / len(intervals) if intervals else 0.0,
        }

    def finalize_session(self) -> Dict[str, Any]:
        """
        Close the session and write summary.json.

        Returns:
            Dict with session statistics
        """
        summary = {
            "session": self.session_timestamp,
            "duration_seconds": time.time() - self.session_start,
            "errors": self.error_count,
            **self.get_cycle_summary(),
        }

        self._log_system_event("session_end", summary)

        summary_path = self.output_dir / "summary.json"
        with open(summary_path, "w") as f:
            json.dump(summary, f, indent=2)

        return summary

    # ------------------------------------------------------------------
    # File I/O
    # ------------------------------------------------------------------

    def _write_jsonl(self, path: Path, data: Dict[str, Any]) -> None:
        """Append one JSON line atomically."""
        try:
            line = json.dumps(data, ensure_ascii=True)
        except TypeError:
            line = json.dumps({"error": "serialization_failed", "repr": repr(data)})

        with self._write_lock:
            with open(path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
