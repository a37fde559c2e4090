"""
Dashboard state snapshot published to observers.
"""
from dataclasses import dataclass, field, replace

from core.models.reading import Reading
from core.models.reading_window import ReadingWindow


@dataclass(frozen=True)
class DashboardState:
    """
    Immutable snapshot of the dashboard.
    A new instance replaces the previous one on every transition.
    """
    readings: ReadingWindow = field(default_factory=ReadingWindow)
    paused: bool = False

    def with_reading(self, reading: Reading) -> "DashboardState":
        return replace(self, readings=self.readings.append(reading))

    def with_paused(self, paused: bool) -> "DashboardState":
        return replace(self, paused=paused)

    @property
    def status_label(self) -> str:
        return "Paused" if self.paused else "Live"
