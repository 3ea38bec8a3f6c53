"""Tests for the recalibration broadcast."""

from __future__ import annotations

from attention_engine.scheduling.recalibration import RecalibrationSignal


def test_emit_notifies_every_subscriber() -> None:
    signal = RecalibrationSignal()
    calls = []
    signal.subscribe(lambda: calls.append("a"))
    signal.subscribe(lambda: calls.append("b"))

    notified = signal.emit()

    assert notified == 2
    assert sorted(calls) == ["a", "b"]
    assert signal.emitted == 1


def test_emit_without_subscribers_is_harmless() -> None:
    signal = RecalibrationSignal()

    assert signal.emit() == 0
    assert signal.emitted == 1


def test_unsubscribed_listener_is_not_called() -> None:
    signal = RecalibrationSignal()
    calls = []
    unsubscribe = signal.subscribe(lambda: calls.append(1))

    unsubscribe()
    signal.emit()

    assert calls == []
    assert signal.listener_count == 0


def test_failing_listener_does_not_block_the_rest(caplog) -> None:
    signal = RecalibrationSignal()
    calls = []

    def dead_session():
        raise RuntimeError("Event loop is closed")

    signal.subscribe(dead_session)
    signal.subscribe(lambda: calls.append("alive"))

    notified = signal.emit()

    assert calls == ["alive"]
    assert notified == 1
    assert "Listener failed" in caplog.text
