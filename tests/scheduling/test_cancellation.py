"""Tests for CancelHandle / CancellationToken."""

from __future__ import annotations

import asyncio

from attention_engine.scheduling.cancellation import CancelHandle, CancellationToken


def test_cancel_runs_cleanups_once() -> None:
    calls = []
    handle = CancelHandle(CancellationToken(), cleanups=[lambda: calls.append("wake"), lambda: calls.append("detach")])

    handle.cancel()
    handle()
    handle.cancel()

    assert calls == ["wake", "detach"]
    assert handle.cancelled
    assert handle.token.cancelled


def test_wait_closed_without_task_returns() -> None:
    handle = CancelHandle(CancellationToken())

    asyncio.run(handle.wait_closed())


def test_wait_closed_awaits_task() -> None:
    finished = []

    async def scenario():
        async def body():
            await asyncio.sleep(0)
            finished.append(True)

        handle = CancelHandle(CancellationToken())
        handle.task = asyncio.get_running_loop().create_task(body())
        await handle.wait_closed()

    asyncio.run(scenario())

    assert finished == [True]
