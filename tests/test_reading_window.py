"""
Tests for ReadingWindow bounded storage
"""
import pytest
from core.models.reading import Reading
from core.models.reading_window import ReadingWindow, DEFAULT_WINDOW_CAPACITY


def _fill(window: ReadingWindow, values) -> ReadingWindow:
    for i, value in enumerate(values):
        window = window.append(Reading(timestamp=i, value=float(value)))
    return window


class TestReadingWindow:
    """Test ReadingWindow basic operations"""

    def test_default_capacity(self) -> None:
        """Default window keeps the last 20 readings"""
        assert ReadingWindow().capacity == DEFAULT_WINDOW_CAPACITY == 20

    def test_empty_window(self) -> None:
        window = ReadingWindow(capacity=5)
        assert window.is_empty()
        assert len(window) == 0
        assert window.values() == []
        assert window.latest() is None

    def test_append_returns_new_window(self) -> None:
        """Appending never mutates the original window"""
        window = ReadingWindow(capacity=5)
        appended = window.append(Reading(timestamp=1, value=10.0))

        assert window.is_empty()
        assert len(appended) == 1
        assert appended is not window
        assert appended.latest() == Reading(timestamp=1, value=10.0)

    def test_values_in_arrival_order(self) -> None:
        window = _fill(ReadingWindow(capacity=5), [3, 1, 2])
        assert window.values() == [3.0, 1.0, 2.0]
        assert [r.timestamp for r in window] == [0, 1, 2]

    def test_eviction_drops_oldest(self) -> None:
        """Test that the oldest reading is dropped once capacity is reached"""
        window = _fill(ReadingWindow(capacity=3), [1, 2, 3, 4, 5])

        assert len(window) == 3
        assert window.is_full()
        assert window.values() == [3.0, 4.0, 5.0]

    def test_twenty_five_into_twenty(self) -> None:
        """Appending 1..25 into a capacity-20 window keeps exactly 6..25"""
        window = _fill(ReadingWindow(capacity=20), range(1, 26))
        assert window.values() == [float(v) for v in range(6, 26)]

    @pytest.mark.parametrize("capacity", [1, 2, 7, 20])
    def test_length_never_exceeds_capacity(self, capacity: int) -> None:
        window = ReadingWindow(capacity=capacity)
        for i in range(capacity * 3):
            window = window.append(Reading(timestamp=i, value=float(i)))
            assert len(window) <= capacity
        expected = [float(i) for i in range(capacity * 2, capacity * 3)]
        assert window.values() == expected

    def test_initial_readings_are_trimmed(self) -> None:
        readings = [Reading(timestamp=i, value=float(i)) for i in range(10)]
        window = ReadingWindow(capacity=4, readings=readings)
        assert window.values() == [6.0, 7.0, 8.0, 9.0]

    def test_invalid_capacity(self) -> None:
        with pytest.raises(ValueError):
            ReadingWindow(capacity=0)

    def test_equality(self) -> None:
        a = _fill(ReadingWindow(capacity=3), [1, 2])
        b = _fill(ReadingWindow(capacity=3), [1, 2])
        assert a == b
        assert a != _fill(ReadingWindow(capacity=4), [1, 2])

    def test_reading_is_immutable(self) -> None:
        reading = Reading(timestamp=1, value=70.0)
        with pytest.raises(AttributeError):
            reading.value = 71.0
