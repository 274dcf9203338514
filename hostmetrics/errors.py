from __future__ import annotations


class MetricsError(Exception):
    """Base for failures recorded on a metric cell.

    These are stored and served, never raised out of the sampling chain.
    """

    def __init__(self, metric: str, cause: BaseException | None = None) -> None:
        self.metric = metric
        self.cause = cause
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.cause is None:
            return f"{self.metric} failed"
        return f"{self.metric} failed: {self.cause}"

    def as_dict(self) -> dict:
        return {"error": str(self)}


class SampleFailure(MetricsError):
    """A stat source call failed while sampling."""

    def _describe(self) -> str:
        if self.cause is None:
            return f"{self.metric} sample failed"
        return f"{self.metric} sample failed: {self.cause}"


class BootstrapFailure(MetricsError):
    """The default network interface could not be resolved."""

    def _describe(self) -> str:
        if self.cause is None:
            return f"{self.metric} interface discovery failed"
        return f"{self.metric} interface discovery failed: {self.cause}"
