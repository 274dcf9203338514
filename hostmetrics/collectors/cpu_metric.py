from __future__ import annotations

from typing import Any

from hostmetrics.collectors.base import DEFAULT_INTERVAL_MS, SampledMetric
from hostmetrics.models import CpuSnapshot
from hostmetrics.sources import StatSource


class CpuMetric(SampledMetric):
    """Background-refreshed CPU load.

    psutil's first ``cpu_times_percent`` call has nothing to diff against and
    reports zeros, which the first-sample suppression hides from readers.
    """

    name = "cpu"

    def __init__(self, source: StatSource, interval: Any = DEFAULT_INTERVAL_MS) -> None:
        self._source = source
        super().__init__(interval=interval)

    def default_snapshot(self) -> CpuSnapshot:
        return CpuSnapshot()

    async def fetch(self) -> CpuSnapshot:
        return await self._source.current_load()
