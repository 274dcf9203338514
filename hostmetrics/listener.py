from __future__ import annotations

import logging
from typing import Any

from hostmetrics.api.router import Dispatch, RequestRouter
from hostmetrics.collectors import (
    CpuMetric,
    NetworkMetric,
    NetworkMetricBootstrap,
    normalize_interval,
)
from hostmetrics.collectors.network_metric import BOOTSTRAP_RETRY_SECONDS
from hostmetrics.engine.request_counter import RequestCounter
from hostmetrics.sources import StatSource

logger = logging.getLogger(__name__)

DEFAULT_PATH_PREFIX = "/metrics"


def normalize_prefix(api_path: str | None) -> str:
    """Strip trailing slashes; blank or root prefixes fall back to the default."""
    if not api_path or not api_path.strip():
        return DEFAULT_PATH_PREFIX
    prefix = api_path.rstrip("/")
    return prefix or DEFAULT_PATH_PREFIX


class MetricsListener:
    """Owns the metric cells, the request counter and the router for one prefix.

    Meant to be mounted into a larger request chain: ``handle()`` says whether
    the request was claimed and, if so, what to answer.
    """

    def __init__(
        self,
        api_path: str | None = DEFAULT_PATH_PREFIX,
        interval: Any = None,
        source: StatSource | None = None,
        bootstrap_retry: float = BOOTSTRAP_RETRY_SECONDS,
    ) -> None:
        self.api_path = normalize_prefix(api_path)
        self.interval = normalize_interval(interval)
        self.source = source or StatSource()
        self.counter = RequestCounter()
        self.cpu = CpuMetric(self.source, interval=self.interval)
        self.network = NetworkMetric(self.source, interval=self.interval)
        self.bootstrap = NetworkMetricBootstrap(
            self.network, self.source, retry_delay=bootstrap_retry
        )
        self.router = RequestRouter(
            self.api_path, self.cpu, self.network, self.counter, self.source
        )

    async def start(self) -> None:
        await self.bootstrap.start()
        await self.cpu.start()
        logger.info(
            "Metrics listener serving %s (interval=%dms)", self.api_path, self.interval
        )

    async def stop(self) -> None:
        await self.cpu.stop()
        await self.bootstrap.stop()
        logger.info("Metrics listener stopped")

    async def handle(self, path: str) -> Dispatch:
        return await self.router.handle(path)
