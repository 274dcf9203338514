from __future__ import annotations


class RequestCounter:
    """Process-lifetime request tally. Never reset, never persisted."""

    def __init__(self) -> None:
        self._value = 0

    def increment(self) -> int:
        self._value += 1
        return self._value

    @property
    def value(self) -> int:
        return self._value
