from .snapshot import CpuSnapshot, MemorySnapshot, NetworkSnapshot, Snapshot, unix_now

__all__ = [
    "CpuSnapshot",
    "MemorySnapshot",
    "NetworkSnapshot",
    "Snapshot",
    "unix_now",
]
