"""A simple stopwatch measuring microseconds."""

from __future__ import annotations

import time


class Timer:
    """Measures time elapsed since construction or the last reset."""

    def __init__(self) -> None:
        self._check_point = time.perf_counter_ns()

    def reset(self) -> None:
        """Restart the measurement from now."""
        self._check_point = time.perf_counter_ns()

    def elapsed(self) -> int:
        """Return whole microseconds elapsed since the check point."""
        return (time.perf_counter_ns() - self._check_point) // 1000