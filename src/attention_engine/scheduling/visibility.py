"""
Foreground/background signal for the detection cadence.

The host application (window focus handler, browser bridge, tray icon...)
owns a VisibilityState and flips it with set_visible(). Listeners are called
synchronously on every actual change, from whatever thread made it.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Protocol

log = logging.getLogger(__name__)

VisibilityListener = Callable[[bool], None]


class VisibilityProvider(Protocol):
    def is_visible(self) -> bool:
        ...

    def subscribe(self, listener: VisibilityListener) -> Callable[[], None]:
        """Register a change listener; returns an unsubscribe callable."""
        ...


class VisibilityState:
    """Settable visibility flag with change notification."""

    def __init__(self, visible: bool = True) -> None:
        self._visible = visible
        self._listeners: List[VisibilityListener] = []
        self._lock = threading.Lock()

    def is_visible(self) -> bool:
        return self._visible

    def set_visible(self, visible: bool) -> None:
        with self._lock:
            if visible == self._visible:
                return
            self._visible = visible
            listeners = list(self._listeners)

        log.debug(f"[Visibility] {'visible' if visible else 'hidden'}")
        for listener in listeners:
            try:
                listener(visible)
            except Exception as err:
                log.error(f"[Visibility] Listener failed: {err}", exc_info=True)

    def toggle(self) -> bool:
        self.set_visible(not self._visible)
        return self._visible

    def subscribe(self, listener: VisibilityListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
