import asyncio
import logging
import random
from typing import AsyncIterator, Callable, Optional

from core.event_hub import EventHub, LIFECYCLE_TOPIC, SNAPSHOT_TOPIC
from core.models.config_data import dashboardConfigData
from core.models.dashboard_state import DashboardState
from core.models.generator_state import GeneratorState
from core.models.reading import Reading
from core.models.reading_window import ReadingWindow
from core.processing.chart_mapper import ChartGeometry, build_geometry
from core.processing.statistics import DerivedStatistics, compute
from core.services.sample_generator import SampleGenerator

logger = logging.getLogger(__name__)


class DashboardClosedError(RuntimeError):
    """Raised when a command reaches a controller that has been closed."""


class DashboardController:
    """
    Sole owner of the dashboard state.

    Holds the current DashboardState snapshot, appends generated readings to
    the window and publishes every new snapshot on the event hub. Pausing and
    resuming flip the snapshot flag and stop/start the generator in one step.
    """

    def __init__(
        self,
        config: Optional[dashboardConfigData] = None,
        hub: Optional[EventHub] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or dashboardConfigData()
        self.config.validate()
        self._hub = hub or EventHub()
        self._state = DashboardState(readings=ReadingWindow(self.config.window_capacity), paused=False)
        self._generator = SampleGenerator(
            self.on_sample_produced,
            interval=self.config.interval_seconds,
            value_min=self.config.value_min,
            value_max=self.config.value_max,
            rng=rng,
        )
        self._started = False
        self._closed = False

    @property
    def generator(self) -> SampleGenerator:
        return self._generator

    @property
    def is_closed(self) -> bool:
        return self._closed

    def start(self):
        """Begin generation. Must be called from within the running event loop."""
        if self._closed:
            raise DashboardClosedError("Dashboard is closed")
        if self._started:
            return

        self._bind_loop()
        if not self._state.paused:
            self._generator.start()
        self._started = True
        logger.info(
            f"DashboardController started (capacity {self.config.window_capacity}, "
            f"interval {self.config.interval_ms} ms, range [{self.config.value_min}, {self.config.value_max}])"
        )

    def _bind_loop(self):
        if self._hub.loop is None:
            try:
                self._hub.init(asyncio.get_running_loop())
            except RuntimeError:
                # Generator start reports the missing loop
                pass

    def close(self):
        """Cancel generation and stop publishing snapshots."""
        if self._closed:
            return
        self._generator.stop()
        self._closed = True
        logger.info("DashboardController closed")
        self._hub.send_all_on_topic(LIFECYCLE_TOPIC, "closed")

    def current_state(self) -> DashboardState:
        return self._state

    def toggle_pause(self) -> DashboardState:
        """
        Flip the paused flag and start or stop the generator to match.

        If resuming fails the snapshot stays paused and the error propagates.
        """
        if self._closed:
            raise DashboardClosedError("Dashboard is closed")

        paused = not self._state.paused
        if paused:
            self._generator.stop()
        else:
            self._bind_loop()
            self._generator.start()
            # Resuming before start() begins the session
            self._started = True

        logger.info("Dashboard paused" if paused else "Dashboard resumed")
        self._publish(self._state.with_paused(paused))
        return self._state

    def on_sample_produced(self, reading: Reading) -> bool:
        """
        Append a generated reading and publish the new snapshot.

        Readings arriving while paused, stopped or closed are dropped.
        Returns True if the reading was applied.
        """
        if self._closed or self._state.paused or self._generator.state != GeneratorState.RUNNING:
            logger.warning(f"Dropping reading {reading.value:.2f} produced while generation is halted")
            return False
        self._publish(self._state.with_reading(reading))
        return True

    def _publish(self, state: DashboardState):
        self._state = state
        if self._closed:
            return
        self._hub.send_all_on_topic(SNAPSHOT_TOPIC, state)

    def subscribe(self, handler: Callable[[str, DashboardState], None]):
        """Register `handler`; it is called with the current snapshot right away and on every change."""
        self._hub.subscribe(SNAPSHOT_TOPIC, handler)
        handler(SNAPSHOT_TOPIC, self._state)

    def unsubscribe(self, handler: Callable[[str, DashboardState], None]):
        self._hub.unsubscribe(SNAPSHOT_TOPIC, handler)

    async def stream(self) -> AsyncIterator[DashboardState]:
        """
        Yield the current snapshot, then every later one, until the dashboard closes.

        Slow consumers only see the latest snapshot; intermediate ones are skipped.
        """
        queue: asyncio.Queue = asyncio.Queue(maxsize=1)

        def push(topic: str, state: Optional[DashboardState]):
            if queue.full():
                queue.get_nowait()
            queue.put_nowait(state)

        def on_lifecycle(topic: str, event: str):
            if event == "closed":
                push(topic, None)

        self._hub.subscribe(LIFECYCLE_TOPIC, on_lifecycle)
        self.subscribe(push)
        try:
            if self._closed:
                return
            while True:
                state = await queue.get()
                if state is None:
                    return
                yield state
        finally:
            self.unsubscribe(push)
            self._hub.unsubscribe(LIFECYCLE_TOPIC, on_lifecycle)

    def statistics(self) -> DerivedStatistics:
        return compute(self._state.readings)

    def chart(self, width: float, height: float) -> ChartGeometry:
        return build_geometry(self._state.readings.values(), width, height)
