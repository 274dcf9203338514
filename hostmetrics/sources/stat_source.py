from __future__ import annotations

import asyncio
import socket
import time
from typing import Any, Callable

import psutil

from hostmetrics.models import CpuSnapshot, MemorySnapshot, NetworkSnapshot

_LOAD_FIELDS = ("user", "system", "nice", "idle", "irq")


def _load_breakdown(percent: Any, raw: Any) -> dict:
    """Map psutil cpu time tuples onto ``load_*`` / ``raw_load_*`` keys."""
    out: dict = {}
    for field in _LOAD_FIELDS:
        out[f"load_{field}"] = float(getattr(percent, field, 0.0))
        out[f"raw_load_{field}"] = float(getattr(raw, field, 0.0))
    out["load"] = round(100.0 - out["load_idle"], 2)
    out["raw_load"] = sum(out[f"raw_load_{f}"] for f in _LOAD_FIELDS if f != "idle")
    return out


class StatSource:
    """Async façade over psutil.

    Every psutil call runs in the default executor so the event loop is never
    blocked on OS stats. Network stats keep a per-interface baseline: the first
    call for an interface has no rate (``-1``), later calls report bytes/sec
    since the previous call.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._net_baseline: dict[str, tuple[int, int, float]] = {}

    # ── cpu ──────────────────────────────────────────────

    async def current_load(self) -> CpuSnapshot:
        return await asyncio.to_thread(self._read_cpu)

    def _read_cpu(self) -> CpuSnapshot:
        total = _load_breakdown(psutil.cpu_times_percent(interval=None), psutil.cpu_times())
        per_core = [
            _load_breakdown(pct, raw)
            for pct, raw in zip(
                psutil.cpu_times_percent(interval=None, percpu=True),
                psutil.cpu_times(percpu=True),
            )
        ]
        cores = psutil.cpu_count() or 1
        return CpuSnapshot(
            avgload=round(psutil.getloadavg()[0] / cores, 2),
            currentload=total["load"],
            currentload_user=total["load_user"],
            currentload_system=total["load_system"],
            currentload_nice=total["load_nice"],
            currentload_idle=total["load_idle"],
            currentload_irq=total["load_irq"],
            raw_currentload=total["raw_load"],
            raw_currentload_user=total["raw_load_user"],
            raw_currentload_system=total["raw_load_system"],
            raw_currentload_nice=total["raw_load_nice"],
            raw_currentload_idle=total["raw_load_idle"],
            raw_currentload_irq=total["raw_load_irq"],
            cpus=per_core,
        )

    # ── memory ───────────────────────────────────────────

    async def mem(self) -> MemorySnapshot:
        return await asyncio.to_thread(self._read_mem)

    @staticmethod
    def _read_mem() -> MemorySnapshot:
        vm = psutil.virtual_memory()
        swap = psutil.swap_memory()
        return MemorySnapshot(
            total=vm.total,
            free=vm.free,
            used=vm.used,
            active=getattr(vm, "active", vm.used),
            available=vm.available,
            buffcache=getattr(vm, "buffers", 0) + getattr(vm, "cached", 0),
            swaptotal=swap.total,
            swapused=swap.used,
            swapfree=swap.free,
        )

    # ── network ──────────────────────────────────────────

    async def network_interface_default(self) -> str:
        return await asyncio.to_thread(self._find_default_iface)

    @staticmethod
    def _find_default_iface() -> str:
        stats = psutil.net_if_stats()
        addrs = psutil.net_if_addrs()
        for name, stat in stats.items():
            if not stat.isup or name.lower().startswith("lo"):
                continue
            if any(addr.family == socket.AF_INET for addr in addrs.get(name, [])):
                return name
        raise LookupError("no active network interface with an IPv4 address")

    async def network_stats(self, iface: str) -> NetworkSnapshot:
        rx, tx, operstate = await asyncio.to_thread(self._read_iface, iface)
        now = self._clock()
        previous = self._net_baseline.get(iface)
        self._net_baseline[iface] = (rx, tx, now)

        if previous is None:
            return NetworkSnapshot(iface=iface, operstate=operstate, rx=rx, tx=tx)

        prev_rx, prev_tx, prev_at = previous
        elapsed = now - prev_at
        if elapsed <= 0:
            return NetworkSnapshot(iface=iface, operstate=operstate, rx=rx, tx=tx)
        return NetworkSnapshot(
            iface=iface,
            operstate=operstate,
            rx=rx,
            tx=tx,
            rx_sec=max(0.0, (rx - prev_rx) / elapsed),
            tx_sec=max(0.0, (tx - prev_tx) / elapsed),
            ms=int(elapsed * 1000),
        )

    @staticmethod
    def _read_iface(iface: str) -> tuple[int, int, str]:
        counters = psutil.net_io_counters(pernic=True).get(iface)
        if counters is None:
            raise LookupError(f"network interface {iface!r} not found")
        stat = psutil.net_if_stats().get(iface)
        if stat is None:
            operstate = "unknown"
        else:
            operstate = "up" if stat.isup else "down"
        return counters.bytes_recv, counters.bytes_sent, operstate
