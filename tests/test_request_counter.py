from __future__ import annotations

from hostmetrics.engine import RequestCounter


def test_starts_at_zero():
    assert RequestCounter().value == 0


def test_increment_is_monotonic():
    counter = RequestCounter()
    seen = [counter.increment() for _ in range(5)]
    assert seen == [1, 2, 3, 4, 5]
    assert counter.value == 5
