from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from fastapi.responses import Response

from hostmetrics.api import responses
from hostmetrics.collectors import SampledMetric
from hostmetrics.engine.request_counter import RequestCounter
from hostmetrics.sources import StatSource

logger = logging.getLogger(__name__)

Handler = Callable[[], Awaitable[Response]]


@dataclass(frozen=True)
class Dispatch:
    """Outcome of routing one request.

    When ``claimed`` is False the router wrote nothing and the host is free to
    pass the request on.
    """

    claimed: bool
    response: Response | None = None


UNCLAIMED = Dispatch(claimed=False)


class RequestRouter:
    """Serves cached metric cells under a fixed path prefix.

    Routing is method-agnostic and matches exact paths only. Cached routes
    read the cell as-is and never trigger a sample; ``/memory`` is the one
    route that fetches fresh on every request.
    """

    def __init__(
        self,
        prefix: str,
        cpu: SampledMetric,
        network: SampledMetric,
        counter: RequestCounter,
        source: StatSource,
    ) -> None:
        self.prefix = prefix
        self._cpu = cpu
        self._network = network
        self._counter = counter
        self._source = source
        self._routes: dict[str, Handler] = {
            f"{prefix}/health": self._health,
            f"{prefix}/requests/total": self._requests_total,
            f"{prefix}/cpu": self._cpu_snapshot,
            f"{prefix}/memory": self._memory,
            f"{prefix}/network": self._network_snapshot,
            f"{prefix}/network/rx": self._network_rx,
            f"{prefix}/network/tx": self._network_tx,
        }

    def owns(self, path: str) -> bool:
        return path == self.prefix or path.startswith(f"{self.prefix}/")

    async def handle(self, path: str) -> Dispatch:
        if not self.owns(path):
            self._counter.increment()
            logger.debug("Not claiming %s", path)
            return UNCLAIMED

        handler = self._routes.get(path)
        if handler is None:
            self._counter.increment()
            return Dispatch(claimed=True, response=responses.not_found())
        return Dispatch(claimed=True, response=await handler())

    # ── routes ──────────────────────────────────────────

    async def _health(self) -> Response:
        return responses.health_ok()

    async def _requests_total(self) -> Response:
        return responses.success({"metric": self._counter.value})

    async def _cpu_snapshot(self) -> Response:
        value, error = self._cpu.read()
        if error is not None:
            return responses.failure(error)
        return responses.success(value)

    async def _memory(self) -> Response:
        try:
            stats = await self._source.mem()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.warning("Memory fetch failed: %s", exc)
            return responses.failure(exc)
        return responses.success(stats.stamped())

    async def _network_snapshot(self) -> Response:
        value, error = self._network.read()
        if error is not None:
            return responses.failure(error)
        return responses.success(value)

    async def _network_rx(self) -> Response:
        value, error = self._network.read()
        if error is not None:
            return responses.failure(error)
        return responses.success({"metric": value.rx})

    async def _network_tx(self) -> Response:
        value, error = self._network.read()
        if error is not None:
            return responses.failure(error)
        return responses.success({"metric": value.tx})
