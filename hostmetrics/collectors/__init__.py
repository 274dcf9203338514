from .base import DEFAULT_INTERVAL_MS, MetricReading, SampledMetric, normalize_interval
from .cpu_metric import CpuMetric
from .network_metric import NetworkMetric, NetworkMetricBootstrap

__all__ = [
    "DEFAULT_INTERVAL_MS",
    "CpuMetric",
    "MetricReading",
    "NetworkMetric",
    "NetworkMetricBootstrap",
    "SampledMetric",
    "normalize_interval",
]
