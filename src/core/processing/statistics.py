"""
Summary statistics derived from a reading window.
Recomputed from scratch for every snapshot; nothing is cached.
"""
from dataclasses import dataclass
from typing import Optional

from core.models.reading_window import ReadingWindow


@dataclass(frozen=True)
class DerivedStatistics:
    current: Optional[float] = None
    average: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None


EMPTY_STATISTICS = DerivedStatistics()


def compute(window: ReadingWindow) -> DerivedStatistics:
    """
    Compute current/average/min/max over the retained values.

    Returns all-None statistics for an empty window. The average is the plain
    arithmetic mean of the retained values.
    """
    values = window.values()
    if not values:
        return EMPTY_STATISTICS

    average = sum(values) / len(values)
    # Rounding in the mean can land a hair outside the extrema when all values are equal
    lowest = min(values)
    highest = max(values)
    average = min(max(average, lowest), highest)

    return DerivedStatistics(
        current=values[-1],
        average=average,
        min=lowest,
        max=highest,
    )
