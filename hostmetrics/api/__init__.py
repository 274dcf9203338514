from .router import Dispatch, RequestRouter

__all__ = ["Dispatch", "RequestRouter"]
