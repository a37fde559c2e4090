from dataclasses import dataclass
import math

from core.models.reading_window import DEFAULT_WINDOW_CAPACITY

DEFAULT_INTERVAL_MS = 2000
DEFAULT_VALUE_MIN = 65.0
DEFAULT_VALUE_MAX = 85.0


@dataclass
class chartConfigData:
    width: int = 1000
    height: int = 320
    line_color: str = "#1976D2"
    background: str = "#F6F8FA"
    dot_radius: int = 3


@dataclass
class dashboardConfigData:
    window_capacity: int = DEFAULT_WINDOW_CAPACITY
    interval_ms: int = DEFAULT_INTERVAL_MS
    value_min: float = DEFAULT_VALUE_MIN
    value_max: float = DEFAULT_VALUE_MAX
    unit: str = "°F"

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000.0

    def validate(self) -> None:
        """Raise ValueError if the tunables cannot drive a dashboard."""
        if self.window_capacity < 1:
            raise ValueError(f"window_capacity must be >= 1, got {self.window_capacity}")
        if self.interval_ms <= 0:
            raise ValueError(f"interval_ms must be > 0, got {self.interval_ms}")
        if not (math.isfinite(self.value_min) and math.isfinite(self.value_max)):
            raise ValueError("value range bounds must be finite")
        if self.value_min > self.value_max:
            raise ValueError(f"value_min ({self.value_min}) must not exceed value_max ({self.value_max})")


@dataclass
class configData:
    dashboard: dashboardConfigData
    chart: chartConfigData
