import asyncio
import logging
import random
import time
from typing import Callable, Optional

from core.models.generator_state import GeneratorState
from core.models.reading import Reading
from core.models.config_data import DEFAULT_INTERVAL_MS, DEFAULT_VALUE_MAX, DEFAULT_VALUE_MIN

logger = logging.getLogger(__name__)


class GeneratorSchedulingError(RuntimeError):
    """Raised when the periodic generation task cannot be scheduled."""


def now_millis() -> int:
    return int(time.time() * 1000)


class SampleGenerator:
    """
    Produces synthetic temperature readings on a fixed interval.

    Every start() opens a new epoch and launches a fresh asyncio task; stop()
    closes the epoch and cancels the task. A tick only reaches the sink if its
    epoch is still the current one, so a tick scheduled before a pause/resume
    cycle can never deliver a reading after it.
    """

    def __init__(
        self,
        sink: Callable[[Reading], None],
        interval: float = DEFAULT_INTERVAL_MS / 1000.0,
        value_min: float = DEFAULT_VALUE_MIN,
        value_max: float = DEFAULT_VALUE_MAX,
        rng: Optional[random.Random] = None,
        clock: Callable[[], int] = now_millis,
    ):
        if interval <= 0:
            raise ValueError(f"Generation interval must be positive, got {interval}")
        if value_min > value_max:
            raise ValueError(f"Invalid value range [{value_min}, {value_max}]")
        self._sink = sink
        self.interval = interval
        self.value_min = value_min
        self.value_max = value_max
        self._rng = rng or random.Random()
        self._clock = clock
        self._task: Optional[asyncio.Task] = None
        self._epoch = 0
        self._state = GeneratorState.STOPPED

    @property
    def state(self) -> GeneratorState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == GeneratorState.RUNNING

    @property
    def epoch(self) -> int:
        return self._epoch

    def start(self):
        """(Re)start generation with a fresh interval. Any previous task is cancelled first."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise GeneratorSchedulingError("No running event loop to schedule sample generation") from e

        self._cancel_task()
        self._epoch += 1
        try:
            self._task = loop.create_task(self._run(self._epoch))
        except RuntimeError as e:
            # Loop is closing
            self._state = GeneratorState.STOPPED
            raise GeneratorSchedulingError(f"Could not schedule sample generation: {e}") from e
        self._state = GeneratorState.RUNNING
        logger.info(f"SampleGenerator started (epoch {self._epoch}, interval {self.interval}s)")

    def stop(self):
        """Stop generation. No reading is delivered after this returns."""
        was_running = self._state == GeneratorState.RUNNING
        self._epoch += 1
        self._cancel_task()
        self._state = GeneratorState.STOPPED
        if was_running:
            logger.info("SampleGenerator stopped")

    def _cancel_task(self):
        if self._task:
            self._task.cancel()
            self._task = None

    def produce_reading(self) -> Reading:
        """Synthesize one reading stamped with the current wall-clock time."""
        return Reading(
            timestamp=self._clock(),
            value=self._rng.uniform(self.value_min, self.value_max),
        )

    def _emit(self, epoch: int) -> bool:
        """Deliver one reading to the sink if `epoch` is still current."""
        if epoch != self._epoch:
            logger.debug(f"Discarding tick from stale epoch {epoch} (current {self._epoch})")
            return False
        reading = self.produce_reading()
        logger.debug(f"Generated reading {reading.value:.2f} at {reading.timestamp}")
        self._sink(reading)
        return True

    async def _run(self, epoch: int):
        loop = asyncio.get_running_loop()
        next_tick = loop.time() + self.interval
        while epoch == self._epoch:
            # Sleep until the next tick boundary so ticks do not drift
            await asyncio.sleep(max(0.0, next_tick - loop.time()))
            # Ticks missed while the loop was blocked are skipped, not replayed
            next_tick = max(next_tick + self.interval, loop.time() + self.interval)
            try:
                self._emit(epoch)
            except Exception:
                logger.exception("Sample sink failed")
