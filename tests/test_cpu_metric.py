from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from hostmetrics.collectors.cpu_metric import CpuMetric
from hostmetrics.errors import SampleFailure
from hostmetrics.models import CpuSnapshot
from hostmetrics.sources import StatSource


def make_source(*loads) -> MagicMock:
    source = MagicMock(spec=StatSource)
    source.current_load = AsyncMock(side_effect=list(loads))
    return source


@pytest.mark.asyncio
async def test_default_is_idle_cpu():
    metric = CpuMetric(make_source())
    value, error = metric.read()
    assert value.currentload_idle == 100
    assert value.cpus == []
    assert error is None


@pytest.mark.asyncio
async def test_zeroed_first_reading_is_hidden():
    """psutil's first reading is all zeros; readers never see it."""
    zeroed = CpuSnapshot(currentload_idle=0)
    real = CpuSnapshot(currentload=37.5, currentload_idle=62.5, cpus=[{"load": 37.5}])
    metric = CpuMetric(make_source(zeroed, real))

    await metric.sample()
    assert metric.read().value.currentload_idle == 100

    await metric.sample()
    value, error = metric.read()
    assert value.currentload == 37.5
    assert value.cpus == [{"load": 37.5}]
    assert value.dateCaptured > 0
    assert error is None


@pytest.mark.asyncio
async def test_failure_recorded_as_sample_failure():
    metric = CpuMetric(make_source(OSError("proc unreadable")))
    await metric.sample()

    value, error = metric.read()
    assert isinstance(error, SampleFailure)
    assert error.metric == "cpu"
    assert value == CpuSnapshot()


@pytest.mark.asyncio
async def test_runs_in_background():
    source = MagicMock(spec=StatSource)
    source.current_load = AsyncMock(return_value=CpuSnapshot(currentload=12.0))
    metric = CpuMetric(source, interval=20)

    await metric.start()
    await asyncio.sleep(0.1)
    await metric.stop()

    assert source.current_load.await_count >= 2
    assert metric.read().value.currentload == 12.0
