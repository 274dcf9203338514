from .request_counter import RequestCounter

__all__ = ["RequestCounter"]
