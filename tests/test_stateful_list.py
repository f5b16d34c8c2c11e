"""Cyclic list selection tests."""

from __future__ import annotations

from serial_dashboard.state import StatefulList


def test_next_without_selection_selects_first() -> None:
    items = StatefulList.with_items(["a", "b", "c"])
    assert items.selected is None
    items.next()
    assert items.selected == 0
    assert items.selected_item == "a"


def test_next_wraps_from_last_to_first() -> None:
    items = StatefulList.with_items(["a", "b", "c"])
    items.selected = 2
    items.next()
    assert items.selected == 0


def test_previous_wraps_from_first_to_last() -> None:
    items = StatefulList.with_items(["a", "b", "c", "d"])
    items.selected = 0
    items.previous()
    assert items.selected == 3
    items.previous()
    assert items.selected == 2


def test_previous_without_selection_selects_first() -> None:
    items = StatefulList.with_items(["a", "b"])
    items.previous()
    assert items.selected == 0


def test_empty_list_moves_are_noops() -> None:
    items: StatefulList[str] = StatefulList()
    items.next()
    assert items.selected is None
    items.previous()
    assert items.selected is None
    assert items.selected_item is None


def test_unselect_always_clears() -> None:
    items = StatefulList.with_items([1, 2, 3])
    items.unselect()
    assert items.selected is None
    items.next()
    items.next()
    items.unselect()
    assert items.selected is None


def test_single_item_stays_selected() -> None:
    items = StatefulList.with_items(["only"])
    items.next()
    items.next()
    assert items.selected == 0
    items.previous()
    assert items.selected == 0


def test_replace_items_keeps_selection_in_range() -> None:
    items = StatefulList.with_items(["a", "b", "c"])
    items.selected = 1
    items.replace_items(["x", "y"])
    assert items.selected == 1
    items.replace_items(["z"])
    assert items.selected is None
    assert len(items) == 1
