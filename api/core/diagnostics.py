"""
Query diagnostics: a running query count and time since the previous query.

Observability only; nothing here affects query results.
"""

from __future__ import annotations

import threading
import time


def format_elapsed(seconds: float) -> str:
    """
    Render an elapsed duration in seconds, minutes or hours by magnitude.
    """
    if seconds < 180:
        return f"{seconds:.4f} sec"
    minutes = seconds / 60
    if minutes < 120:
        return f"{minutes:.4f} min"
    hours = minutes / 60
    return f"{hours:.4f} hours"


class QueryStats:
    def __init__(self, clock=time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self.count = 0
        self.last_at = clock()

    def reset(self) -> None:
        with self._lock:
            self.count = 0
            self.last_at = self._clock()

    def tick(self) -> tuple[int, float]:
        """
        Record one query. Returns (count before this query, seconds since last).
        """
        with self._lock:
            now = self._clock()
            elapsed = now - self.last_at
            number = self.count
            self.count += 1
            self.last_at = now
        return number, elapsed
