"""Wall-clock timers and aggregate statistics over several timings."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Callable, Iterable


class Timer:
    """A stopwatch: ``tick`` starts it, ``tock`` stops it and records the elapsed time."""

    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self._start: float | None = None
        self.elapsed: float | None = None

    def tick(self) -> None:
        self._start = self._clock()
        self.elapsed = None

    def tock(self) -> float:
        if self._start is None:
            raise RuntimeError("timer was not started")
        self.elapsed = self._clock() - self._start
        self._start = None
        return self.elapsed

    def __enter__(self) -> "Timer":
        self.tick()
        return self

    def __exit__(self, *exc_info) -> None:
        self.tock()


@dataclass(frozen=True)
class TimerStats:
    """Minimum, maximum, mean and population standard deviation of timings."""

    min: float
    max: float
    mean: float
    std: float


def collect_stats(timers: Iterable[float]) -> TimerStats:
    """Aggregate a collection of elapsed times."""
    values = list(timers)
    if not values:
        raise ValueError("no timings to aggregate")
    count = len(values)
    mean = math.fsum(values) / count
    variance = math.fsum((v - mean) ** 2 for v in values) / count
    return TimerStats(min=min(values), max=max(values), mean=mean, std=math.sqrt(variance))


def format_stats(prefix: str, stats: TimerStats) -> str:
    """Render statistics as a single report line."""
    return (
        f"{prefix} timer seconds mean = {stats.mean:.2f}, min = {stats.min:.2f}, "
        f"max = {stats.max:.2f}, std = {stats.std:.3f}"
    )