"""Tab identifiers and the cyclic tab selector."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=Enum)


class Tab(Enum):
    """Closed set of dashboard pages, in display order."""

    WELCOME = "Welcome"
    MONITOR = "Monitor"
    CONSOLE = "Console"
    SETTINGS = "Settings"

    def __str__(self) -> str:
        return self.value


class TabSelector(Generic[T]):
    """Fixed, ordered tab titles with a wrapping current index.

    `current` always equals `titles[index]`; both only change through
    `next`, `previous` and `select`.
    """

    def __init__(self, titles: Sequence[T], default: T | None = None) -> None:
        if not titles:
            raise ValueError("TabSelector requires at least one title.")
        self.titles: tuple[T, ...] = tuple(titles)
        if default is None:
            self.index = 0
        else:
            try:
                self.index = self.titles.index(default)
            except ValueError:
                raise ValueError(
                    f"Default tab {default!r} is not one of {list(self.titles)!r}."
                ) from None
        self.current: T = self.titles[self.index]

    @classmethod
    def from_enum(cls, enum_cls: type[E], default: E | None = None) -> TabSelector[E]:
        """Build a selector over every member of `enum_cls` in declared order."""
        return cls(list(enum_cls), default)  # type: ignore[return-value, arg-type]

    def next(self) -> None:
        self.index = (self.index + 1) % len(self.titles)
        self.current = self.titles[self.index]

    def previous(self) -> None:
        if self.index > 0:
            self.index -= 1
        else:
            self.index = len(self.titles) - 1
        self.current = self.titles[self.index]

    def select(self, title: T) -> None:
        """Jump directly to `title`."""
        try:
            self.index = self.titles.index(title)
        except ValueError:
            raise ValueError(f"Unknown tab {title!r}.") from None
        self.current = self.titles[self.index]

    def __len__(self) -> int:
        return len(self.titles)
