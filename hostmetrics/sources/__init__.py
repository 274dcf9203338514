from .stat_source import StatSource

__all__ = ["StatSource"]
