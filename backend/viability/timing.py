"""Per-step latency logging for one validation run."""

import logging
import time
from contextlib import asynccontextmanager, contextmanager

logger = logging.getLogger(__name__)


class StepTimer:
    """Records how long each named pipeline step took.

    Durations are kept in ``steps`` (milliseconds) and logged at DEBUG under
    ``[TIMING]``; ``summary()`` logs the total and the slowest step.
    """

    def __init__(self, run_name: str):
        self.run_name = run_name
        self.steps: dict[str, float] = {}
        self._started = time.perf_counter()

    def _record(self, step_name: str, started: float) -> None:
        elapsed_ms = (time.perf_counter() - started) * 1000
        self.steps[step_name] = elapsed_ms
        logger.debug("[TIMING] %s.%s %.1fms", self.run_name, step_name, elapsed_ms)

    @contextmanager
    def step(self, step_name: str):
        started = time.perf_counter()
        try:
            yield
        finally:
            self._record(step_name, started)

    @asynccontextmanager
    async def async_step(self, step_name: str):
        started = time.perf_counter()
        try:
            yield
        finally:
            self._record(step_name, started)

    def summary(self) -> float:
        """Total elapsed milliseconds since the timer was created."""
        total_ms = (time.perf_counter() - self._started) * 1000
        if self.steps:
            slowest = max(self.steps, key=self.steps.get)
            logger.debug(
                "[TIMING] %s total=%.1fms slowest=%s (%.1fms)",
                self.run_name, total_ms, slowest, self.steps[slowest],
            )
        else:
            logger.debug("[TIMING] %s total=%.1fms", self.run_name, total_ms)
        return total_ms
