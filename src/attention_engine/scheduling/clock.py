"""Time source used by the detection scheduler."""

from __future__ import annotations

import asyncio
import time
from typing import Protocol


class Clock(Protocol):
    def monotonic(self) -> float:
        """Seconds from an arbitrary, non-decreasing origin."""
        ...

    async def sleep(self, seconds: float) -> None:
        ...


class MonotonicClock:
    """Real clock: time.monotonic() + asyncio.sleep()."""

    def monotonic(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)
