"""
Maps a series of scalar values onto viewport pixel coordinates for a polyline.
"""
import math
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

Point = Tuple[float, float]


@dataclass(frozen=True)
class ChartGeometry:
    width: float
    height: float
    values: Tuple[float, ...] = field(default_factory=tuple)
    points: Tuple[Point, ...] = field(default_factory=tuple)

    def is_empty(self) -> bool:
        return not self.points


def validate_viewport(width: float, height: float) -> None:
    """Raise ValueError for viewport sizes that cannot be drawn on."""
    for name, dim in (("width", width), ("height", height)):
        if not math.isfinite(dim) or dim < 0:
            raise ValueError(f"Viewport {name} must be a finite, non-negative number, got {dim}")


def map_points(values: Sequence[float], viewport_width: float, viewport_height: float) -> List[Point]:
    """
    Map `values` to (x, y) pairs inside a viewport whose origin is top-left.

    Points are spread evenly along x, the first at x=0. The y axis is inverted
    so larger values sit higher on screen. A flat series (zero range) uses a
    range of 1 and therefore draws a horizontal line along the bottom edge.
    """
    if not values:
        return []

    lowest = min(values)
    highest = max(values)
    value_range = highest - lowest
    if value_range == 0:
        value_range = 1.0

    step_x = viewport_width / max(len(values) - 1, 1)

    points: List[Point] = []
    for i, value in enumerate(values):
        normalized = (value - lowest) / value_range
        points.append((step_x * i, viewport_height - normalized * viewport_height))
    return points


def build_geometry(values: Sequence[float], viewport_width: float, viewport_height: float) -> ChartGeometry:
    """Validate the viewport and bundle mapped points with their source values."""
    validate_viewport(viewport_width, viewport_height)
    return ChartGeometry(
        width=viewport_width,
        height=viewport_height,
        values=tuple(values),
        points=tuple(map_points(values, viewport_width, viewport_height)),
    )
