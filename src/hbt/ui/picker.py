"""Searchable, scrollable pickers for the habit form.

A picker has two parts: an immutable :class:`PickerState` (search text,
selection, scroll offset) owned by the form, and a :class:`Picker` that knows
the candidate items and the grid shape and turns key presses into new states.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from typing import Generic, TypeVar

from hbt.emoji import COMMON_EMOJIS, EMOJI_KEYWORDS
from hbt.models import Category
from hbt.ui.keys import DEFAULT_KEYMAP, KeyMap, is_printable
from hbt.ui.panel_builder import filter_items, reconcile_scroll

T = TypeVar("T")

EMOJI_COLUMNS = 8
EMOJI_VISIBLE_ROWS = 8
CATEGORY_COLUMNS = 1
CATEGORY_VISIBLE_ROWS = 8


@dataclass(frozen=True)
class PickerState:
    """Search buffer, selection into the filtered list (None = "none"), scroll row."""

    search: str = ""
    selection: int | None = None
    scroll: int = 0


@dataclass(frozen=True)
class PickerPending:
    """Picker stays open."""


@dataclass(frozen=True)
class PickerChosen(Generic[T]):
    """Selection confirmed; item is None when "(none)" was chosen."""

    item: T | None


@dataclass(frozen=True)
class PickerClosed:
    """Picker dismissed without changing the field."""


PickerResult = PickerPending | PickerChosen | PickerClosed


def step_left(selection: int | None) -> int | None:
    if selection is None or selection == 0:
        return None
    return selection - 1


def step_right(selection: int | None, count: int) -> int | None:
    if count == 0:
        return None
    if selection is None:
        return 0
    return min(selection + 1, count - 1)


def step_up(selection: int | None, distance: int) -> int | None:
    """Move up by distance; the first row leads to the "none" option."""
    if selection is None or selection < distance:
        return None
    return selection - distance


def step_down(selection: int | None, count: int, distance: int) -> int | None:
    """Move down by distance, stopping at the last item."""
    if count == 0:
        return None
    if selection is None:
        return 0
    return min(selection + distance, count - 1)


class Picker(Generic[T]):
    """Candidate list plus grid shape for one picker."""

    def __init__(
        self,
        items: Sequence[T],
        keywords: Callable[[T], str],
        columns: int,
        visible_rows: int,
        keymap: KeyMap = DEFAULT_KEYMAP,
    ):
        self.items = list(items)
        self.keywords = keywords
        self.columns = columns
        self.visible_rows = visible_rows
        self.keymap = keymap

    def filtered(self, state: PickerState) -> list[T]:
        return filter_items(self.items, state.search, self.keywords)

    def open(self, current: T | None = None) -> PickerState:
        """Initial state with the current value selected and scrolled into view."""
        selection = self.items.index(current) if current in self.items else None
        return self.reconcile(PickerState(selection=selection))

    def reconcile(self, state: PickerState) -> PickerState:
        """Clamp the selection to the filtered list and fix the scroll offset."""
        count = len(self.filtered(state))
        selection = state.selection
        if selection is not None and not 0 <= selection < count:
            selection = None
        scroll = reconcile_scroll(selection, count, state.scroll, self.columns, self.visible_rows)
        return replace(state, selection=selection, scroll=scroll)

    def update(self, state: PickerState, key: str) -> tuple[PickerState, PickerResult]:
        keys = self.keymap
        count = len(self.filtered(state))
        page = self.columns * self.visible_rows

        if key in keys.back:
            return state, PickerClosed()
        if key in keys.enter:
            filtered = self.filtered(state)
            item = filtered[state.selection] if state.selection is not None else None
            return state, PickerChosen(item)

        if key in keys.left:
            state = replace(state, selection=step_left(state.selection))
        elif key in keys.right:
            state = replace(state, selection=step_right(state.selection, count))
        elif key == keys.up[0]:
            state = replace(state, selection=step_up(state.selection, self.columns))
        elif key == keys.down[0]:
            state = replace(state, selection=step_down(state.selection, count, self.columns))
        elif key in keys.page_up:
            state = replace(state, selection=step_up(state.selection, page))
        elif key in keys.page_down:
            state = replace(state, selection=step_down(state.selection, count, page))
        elif key in keys.backspace:
            state = replace(state, search=state.search[:-1])
        elif is_printable(key):
            state = replace(state, search=state.search + key)
        else:
            return state, PickerPending()

        return self.reconcile(state), PickerPending()


def emoji_picker() -> Picker[str]:
    return Picker(
        COMMON_EMOJIS,
        keywords=lambda emoji: EMOJI_KEYWORDS.get(emoji, ""),
        columns=EMOJI_COLUMNS,
        visible_rows=EMOJI_VISIBLE_ROWS,
    )


def category_picker(categories: Sequence[Category]) -> Picker[Category]:
    return Picker(
        categories,
        keywords=lambda category: category.name,
        columns=CATEGORY_COLUMNS,
        visible_rows=CATEGORY_VISIBLE_ROWS,
    )
