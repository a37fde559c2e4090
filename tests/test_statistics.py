"""
Tests for derived statistics
"""
import pytest
from core.models.reading import Reading
from core.models.reading_window import ReadingWindow
from core.processing.statistics import compute, DerivedStatistics


def _window(values, capacity: int = 20) -> ReadingWindow:
    window = ReadingWindow(capacity=capacity)
    for i, value in enumerate(values):
        window = window.append(Reading(timestamp=i, value=value))
    return window


def test_empty_window_yields_all_none() -> None:
    stats = compute(ReadingWindow())
    assert stats == DerivedStatistics(current=None, average=None, min=None, max=None)


def test_three_readings_scenario() -> None:
    stats = compute(_window([70.0, 75.0, 68.0]))
    assert stats.current == 68.0
    assert stats.average == pytest.approx(71.0)
    assert stats.min == 68.0
    assert stats.max == 75.0


def test_single_reading() -> None:
    stats = compute(_window([72.5]))
    assert stats.current == stats.average == stats.min == stats.max == 72.5


@pytest.mark.parametrize("values", [
    [65.0, 85.0],
    [0.1, 0.1, 0.1],
    [80.2, 66.3, 71.9, 84.99, 65.01],
    [-3.0, 12.5, 7.25],
])
def test_average_between_extrema(values) -> None:
    stats = compute(_window(values))
    assert stats.min <= stats.average <= stats.max
    assert stats.current == values[-1]


def test_only_retained_values_count() -> None:
    """Evicted readings no longer influence the statistics"""
    stats = compute(_window([100.0, 1.0, 2.0, 3.0], capacity=3))
    assert stats.max == 3.0
    assert stats.average == pytest.approx(2.0)
