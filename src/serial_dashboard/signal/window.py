"""Fixed-width sliding sample buffers fed from signal sources."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from typing import Generic, Protocol, TypeVar

S = TypeVar("S", covariant=True)
T = TypeVar("T")


class SampleSource(Protocol[S]):
    def next(self) -> S: ...


class SignalWindow(Generic[T]):
    """Keep the newest `width` samples; older samples fall off the front."""

    def __init__(self, width: int) -> None:
        if width <= 0:
            raise ValueError("SignalWindow width must be > 0.")
        self.width = width
        self._samples: deque[T] = deque(maxlen=width)

    def fill(self, source: SampleSource[T]) -> None:
        """Top the window up to `width` samples."""
        while len(self._samples) < self.width:
            self._samples.append(source.next())

    def advance(self, source: SampleSource[T], count: int = 1) -> None:
        """Pull `count` new samples, discarding the oldest ones."""
        for _ in range(count):
            self._samples.append(source.next())

    def snapshot(self) -> list[T]:
        return list(self._samples)

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[T]:
        return iter(self._samples)
