from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


def unix_now() -> int:
    """Current UTC time as whole unix seconds."""
    return int(datetime.now(timezone.utc).timestamp())


class Snapshot(BaseModel):
    """Immutable measurement paired with the unix second it was captured."""

    model_config = ConfigDict(frozen=True, extra="allow")

    dateCaptured: int = 0

    def stamped(self, when: int | None = None) -> Snapshot:
        return self.model_copy(update={"dateCaptured": unix_now() if when is None else when})


class CpuSnapshot(Snapshot):
    """Aggregate and per-core CPU load.

    The default instance is the reading served before any sample is adopted:
    fully idle, everything else zero, no cores.
    """

    avgload: float = 0
    currentload: float = 0
    currentload_user: float = 0
    currentload_system: float = 0
    currentload_nice: float = 0
    currentload_idle: float = 100
    currentload_irq: float = 0
    raw_currentload: float = 0
    raw_currentload_user: float = 0
    raw_currentload_system: float = 0
    raw_currentload_nice: float = 0
    raw_currentload_idle: float = 0
    raw_currentload_irq: float = 0
    cpus: list[dict] = Field(default_factory=list)


class MemorySnapshot(Snapshot):
    """Memory stats, passed through as the stat source reports them."""


class NetworkSnapshot(Snapshot):
    """Throughput of one interface. ``rx_sec``/``tx_sec`` of -1 mean no rate yet."""

    iface: str = "unknown"
    operstate: str = "unknown"
    rx: int = 0
    tx: int = 0
    rx_sec: float = -1
    tx_sec: float = -1
    ms: int = 0
