"""Tests for the moving-median smoothing windows."""

from __future__ import annotations

import statistics

import pytest

from attention_engine.calibration.temporal_filter import SmoothingWindow, TemporalFilter
from attention_engine.orientation.orientation_estimator import OrientationSample


def test_window_never_exceeds_capacity() -> None:
    window = SmoothingWindow(size=10)
    for value in range(25):
        window.push(float(value))
        assert len(window) <= 10

    assert window.values() == [float(v) for v in range(15, 25)]


def test_median_ignores_single_outlier() -> None:
    window = SmoothingWindow(size=10)
    values = [0.01, 0.02, 0.015, 0.012, 0.018, 0.011, 0.02, 0.017, 0.013, 5.0]
    for value in values:
        window.push(value)

    smoothed = window.median()

    assert smoothed == pytest.approx(statistics.median(values))
    assert smoothed < 0.02
    assert smoothed < statistics.mean(values)


def test_even_window_averages_middle_values() -> None:
    window = SmoothingWindow(size=4)
    for value in [4.0, 1.0, 3.0, 2.0]:
        window.push(value)

    assert window.median() == pytest.approx(2.5)


def test_odd_window_returns_middle_value() -> None:
    window = SmoothingWindow(size=10)
    for value in [0.3, -0.1, 0.2]:
        window.push(value)

    assert window.median() == pytest.approx(0.2)


def test_empty_window_median_is_zero() -> None:
    assert SmoothingWindow().median() == 0.0


def test_window_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        SmoothingWindow(size=0)


def test_filter_smooths_each_axis_independently() -> None:
    temporal = TemporalFilter(window_size=10)
    samples = [
        OrientationSample(yaw=0.1, pitch=-0.2, roll=0.0),
        OrientationSample(yaw=0.3, pitch=-0.4, roll=0.5),
        OrientationSample(yaw=0.2, pitch=-0.3, roll=0.1),
    ]

    smoothed = None
    for sample in samples:
        smoothed = temporal.push(sample)

    assert smoothed.yaw == pytest.approx(0.2)
    assert smoothed.pitch == pytest.approx(-0.3)
    assert smoothed.roll == pytest.approx(0.1)
    assert smoothed.ok is True


def test_filter_clear_empties_all_windows() -> None:
    temporal = TemporalFilter(window_size=10)
    for _ in range(5):
        temporal.push(OrientationSample(yaw=1.0, pitch=1.0, roll=1.0))

    temporal.clear()

    assert len(temporal.yaw) == len(temporal.pitch) == len(temporal.roll) == 0
    assert temporal.push(OrientationSample(yaw=0.5, pitch=0.0, roll=0.0)).yaw == pytest.approx(0.5)
