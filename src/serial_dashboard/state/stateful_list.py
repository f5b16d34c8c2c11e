"""Selection state over an externally supplied, ordered collection."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Generic, TypeVar

T = TypeVar("T")


class StatefulList(Generic[T]):
    """Ordered items plus an optional selected index that wraps at both ends.

    Moving the selection over an empty collection is a no-op; `selected`
    stays None.
    """

    def __init__(self) -> None:
        self.items: list[T] = []
        self.selected: int | None = None

    @classmethod
    def with_items(cls, items: Iterable[T]) -> StatefulList[T]:
        state: StatefulList[T] = cls()
        state.items = list(items)
        return state

    def next(self) -> None:
        if not self.items:
            return
        if self.selected is None or self.selected >= len(self.items) - 1:
            self.selected = 0
        else:
            self.selected += 1

    def previous(self) -> None:
        if not self.items:
            return
        if self.selected is None:
            self.selected = 0
        elif self.selected == 0:
            self.selected = len(self.items) - 1
        else:
            self.selected -= 1

    def unselect(self) -> None:
        self.selected = None

    @property
    def selected_item(self) -> T | None:
        if self.selected is None:
            return None
        return self.items[self.selected]

    def replace_items(self, items: Iterable[T]) -> None:
        """Swap the collection, keeping the selection only if still in range."""
        self.items = list(items)
        if self.selected is not None and self.selected >= len(self.items):
            self.selected = None

    def __len__(self) -> int:
        return len(self.items)
