from __future__ import annotations

import asyncio
import logging
from typing import Any

from hostmetrics.collectors.base import DEFAULT_INTERVAL_MS, SampledMetric
from hostmetrics.errors import BootstrapFailure
from hostmetrics.models import NetworkSnapshot
from hostmetrics.sources import StatSource

logger = logging.getLogger(__name__)

BOOTSTRAP_RETRY_SECONDS = 1.0


class NetworkMetric(SampledMetric):
    """Background-refreshed throughput of a single interface.

    Rates are deltas between two stat source calls, so the suppressed first
    sample is what seeds the baseline.
    """

    name = "network"

    def __init__(self, source: StatSource, interval: Any = DEFAULT_INTERVAL_MS) -> None:
        self._source = source
        self.iface: str | None = None
        super().__init__(interval=interval)

    def default_snapshot(self) -> NetworkSnapshot:
        return NetworkSnapshot()

    async def fetch(self) -> NetworkSnapshot:
        if self.iface is None:
            raise RuntimeError("network interface not resolved")
        return await self._source.network_stats(self.iface)


class NetworkMetricBootstrap:
    """Resolves the default interface, then starts network sampling.

    Resolution failures are recorded on the metric and the whole bootstrap is
    retried after ``retry_delay`` seconds, forever.
    """

    def __init__(
        self,
        metric: NetworkMetric,
        source: StatSource,
        retry_delay: float = BOOTSTRAP_RETRY_SECONDS,
    ) -> None:
        self.metric = metric
        self._source = source
        self.retry_delay = retry_delay
        self.attempts = 0
        self._task: asyncio.Task | None = None

    async def start(self) -> None:
        if self._task is not None:
            return
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        await self.metric.stop()

    async def _run(self) -> None:
        while True:
            self.attempts += 1
            try:
                iface = await self._source.network_interface_default()
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                self.metric.record_error(BootstrapFailure(self.metric.name, exc))
                logger.warning(
                    "Network bootstrap attempt %d failed, retrying in %.1fs: %s",
                    self.attempts,
                    self.retry_delay,
                    exc,
                )
                await asyncio.sleep(self.retry_delay)
                continue

            logger.info("Network bootstrap resolved interface %s", iface)
            self.metric.iface = iface
            await self.metric.start()
            return

    @property
    def done(self) -> bool:
        return self._task is not None and self._task.done()
