"""
ReadingWindow: bounded, insertion-ordered store of the most recent readings.
Appending never mutates a window; it returns a new one so snapshots handed
to observers stay valid.
"""
from typing import Iterable, Iterator, List, Optional, Tuple

from core.models.reading import Reading

DEFAULT_WINDOW_CAPACITY = 20


class ReadingWindow:
    """
    Immutable window of readings.
    - Fixed capacity, drops the oldest reading when full (FIFO)
    - Arrival order preserved (index 0 = oldest)
    - O(capacity) append, which is fine for the small windows displayed
    """

    __slots__ = ('capacity', '_readings')

    def __init__(self, capacity: int = DEFAULT_WINDOW_CAPACITY, readings: Iterable[Reading] = ()):
        """
        Initialize a reading window.

        Args:
            capacity: Maximum number of readings retained
            readings: Initial readings, oldest first. Only the last `capacity` are kept.
        """
        if capacity < 1:
            raise ValueError(f"Window capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        items = tuple(readings)
        self._readings: Tuple[Reading, ...] = items[-capacity:]

    def append(self, reading: Reading) -> "ReadingWindow":
        """Return a new window with `reading` appended, evicting the oldest entry if needed."""
        items = self._readings + (reading,)
        if len(items) > self.capacity:
            items = items[len(items) - self.capacity:]
        return ReadingWindow(self.capacity, items)

    def values(self) -> List[float]:
        """Values in chronological order."""
        return [r.value for r in self._readings]

    def latest(self) -> Optional[Reading]:
        return self._readings[-1] if self._readings else None

    def is_empty(self) -> bool:
        return not self._readings

    def is_full(self) -> bool:
        return len(self._readings) == self.capacity

    def __len__(self) -> int:
        return len(self._readings)

    def __iter__(self) -> Iterator[Reading]:
        return iter(self._readings)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReadingWindow):
            return NotImplemented
        return self.capacity == other.capacity and self._readings == other._readings

    def __hash__(self) -> int:
        return hash((self.capacity, self._readings))

    def __repr__(self) -> str:
        return f"ReadingWindow(capacity={self.capacity}, size={len(self._readings)})"
