from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, NamedTuple

from hostmetrics.errors import MetricsError, SampleFailure
from hostmetrics.models import Snapshot

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_MS = 1000


def normalize_interval(interval: Any) -> int:
    """Positive integer milliseconds, or the default for anything else."""
    if isinstance(interval, bool) or not isinstance(interval, int) or interval < 1:
        return DEFAULT_INTERVAL_MS
    return interval


class MetricReading(NamedTuple):
    value: Snapshot
    error: MetricsError | None


class SampledMetric(ABC):
    """Self-refreshing cache cell for one metric family.

    ``start()`` takes a seed sample and then launches a timer that issues a new
    sample every ``interval`` milliseconds. The first successful sample only
    warms up the stat source and is never adopted, so readers see the default
    snapshot until a second sample succeeds.

    Ticks do not wait for earlier samples to finish. When samples overlap, the
    one that completes last wins, regardless of issue order.
    """

    name: str = "base"

    def __init__(self, interval: Any = DEFAULT_INTERVAL_MS) -> None:
        self.interval = normalize_interval(interval)
        self.sample_count = 0
        self._last_good: Snapshot = self.default_snapshot()
        self._last_error: MetricsError | None = None
        self._running = False
        self._task: asyncio.Task | None = None
        self._inflight: set[asyncio.Task] = set()

    # ── lifecycle ────────────────────────────────────────

    async def start(self) -> None:
        if self._running:
            return
        self._running = True
        await self.sample()
        if not self._running:
            return
        self._task = asyncio.create_task(self._loop())
        logger.info("Metric [%s] started (interval=%dms)", self.name, self.interval)

    async def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        pending = list(self._inflight)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        self._inflight.clear()
        logger.info("Metric [%s] stopped", self.name)

    # ── abstract methods ────────────────────────────────

    @abstractmethod
    def default_snapshot(self) -> Snapshot:
        """Value served before any sample has been adopted."""
        ...

    @abstractmethod
    async def fetch(self) -> Snapshot:
        """Take one measurement from the stat source."""
        ...

    # ── sampling ─────────────────────────────────────────

    async def sample(self) -> None:
        try:
            snapshot = await self.fetch()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            self._last_error = SampleFailure(self.name, exc)
            logger.warning("Metric [%s] sample failed: %s", self.name, exc)
            return

        self.sample_count += 1
        if self.sample_count > 1:
            self._last_good = snapshot.stamped()
            self._last_error = None

    def read(self) -> MetricReading:
        return MetricReading(self._last_good, self._last_error)

    def record_error(self, error: MetricsError) -> None:
        self._last_error = error

    # ── internals ───────────────────────────────────────

    async def _loop(self) -> None:
        while self._running:
            await asyncio.sleep(self.interval / 1000)
            task = asyncio.create_task(self.sample())
            self._inflight.add(task)
            task.add_done_callback(self._inflight.discard)

    @property
    def running(self) -> bool:
        return self._running

    @property
    def in_flight(self) -> int:
        return len(self._inflight)
