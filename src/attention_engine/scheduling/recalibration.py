"""
Fire-and-forget recalibration broadcast.

A UI "Recalibrate" button calls emit(); every running detection loop that
subscribed resets its session before its next cycle. Listeners are plain
callables so the signal does not depend on any event-bus mechanism.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, List

log = logging.getLogger(__name__)


class RecalibrationSignal:
    """Broadcasts recalibration requests to subscribed sessions."""

    def __init__(self) -> None:
        self._listeners: List[Callable[[], None]] = []
        self._lock = threading.Lock()
        self.emitted = 0

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def emit(self) -> int:
        """Notify all subscribers; returns how many handled the signal without error."""
        with self._lock:
            listeners = list(self._listeners)
            self.emitted += 1

        delivered = 0
        for listener in listeners:
            try:
                listener()
            except Exception as err:
                log.error(f"[Recalibration] Listener failed: {err}", exc_info=True)
                continue
            delivered += 1

        log.info(f"[Recalibration] Signal delivered to {delivered} session(s)")
        return delivered

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
