from __future__ import annotations

import pytest

from core.diagnostics import QueryStats, format_elapsed


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (0, "0.0000 sec"),
        (1.23456, "1.2346 sec"),
        (179.5, "179.5000 sec"),
        (180, "3.0000 min"),
        (90 * 60, "90.0000 min"),
        (120 * 60, "2.0000 hours"),
        (36 * 3600, "36.0000 hours"),
    ],
)
def test_format_elapsed(seconds, expected):
    assert format_elapsed(seconds) == expected


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_query_stats_counts_and_measures_gaps():
    clock = FakeClock()
    stats = QueryStats(clock=clock)

    clock.now = 102.5
    assert stats.tick() == (0, 2.5)

    clock.now = 110.0
    assert stats.tick() == (1, 7.5)
    assert stats.count == 2


def test_query_stats_reset():
    clock = FakeClock()
    stats = QueryStats(clock=clock)
    stats.tick()
    stats.tick()

    clock.now = 500.0
    stats.reset()

    assert stats.count == 0
    assert stats.last_at == 500.0
