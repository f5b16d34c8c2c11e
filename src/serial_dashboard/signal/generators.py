"""Unbounded numeric signal sources for chart tabs.

Each source is a small stateful object with an explicit `next()` so callers
decide how many samples to pull per frame.
"""

from __future__ import annotations

import math
import random


class RandomSignal:
    """Uniform integers in `[lower, upper)`."""

    def __init__(self, lower: int, upper: int, rng: random.Random | None = None) -> None:
        if lower >= upper:
            raise ValueError(f"RandomSignal requires lower < upper, got [{lower}, {upper}).")
        self.lower = lower
        self.upper = upper
        self._rng = rng or random.Random()

    def next(self) -> int:
        return self._rng.randrange(self.lower, self.upper)

    def take(self, count: int) -> list[int]:
        return [self.next() for _ in range(count)]


class SinSignal:
    """Points `(x, scale * sin(x / period))` with `x` stepping by `interval`."""

    def __init__(self, interval: float, period: float, scale: float) -> None:
        if period == 0:
            raise ValueError("SinSignal period must not be 0.")
        self.interval = interval
        self.period = period
        self.scale = scale
        self.x = 0.0

    def next(self) -> tuple[float, float]:
        point = (self.x, math.sin(self.x / self.period) * self.scale)
        self.x += self.interval
        return point

    def take(self, count: int) -> list[tuple[float, float]]:
        return [self.next() for _ in range(count)]

    def reset(self) -> None:
        self.x = 0.0
