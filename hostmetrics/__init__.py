"""Host telemetry served from background-refreshed cache cells."""
from .listener import MetricsListener

__all__ = ["MetricsListener"]
