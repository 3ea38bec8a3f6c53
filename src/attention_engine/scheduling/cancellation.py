"""Cooperative cancellation for the detection loop."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional

log = logging.getLogger(__name__)


class CancellationToken:
    """Flag checked by the loop before each cycle commits its side effects."""

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class CancelHandle:
    """
    Returned by DetectionScheduler.start().

    Calling the handle (or cancel()) stops the loop. It is idempotent: the
    first call flips the token and runs the cleanup callbacks (wake the
    pending wait, detach listeners); later calls do nothing.
    """

    def __init__(
        self,
        token: CancellationToken,
        task: Optional["asyncio.Task[None]"] = None,
        cleanups: Optional[List[Callable[[], None]]] = None,
    ) -> None:
        self.token = token
        self.task = task
        self._cleanups = list(cleanups or [])

    @property
    def cancelled(self) -> bool:
        return self.token.cancelled

    def cancel(self) -> None:
        if self.token.cancelled:
            return
        self.token.cancel()

        cleanups, self._cleanups = self._cleanups, []
        for cleanup in cleanups:
            cleanup()
        log.info("[Scheduler] Detection loop cancelled")

    def __call__(self) -> None:
        self.cancel()

    async def wait_closed(self) -> None:
        """Wait until the loop task has exited."""
        if self.task is not None:
            await self.task
