"""Filtering and scroll-window math for the picker grids."""

from collections.abc import Callable, Sequence
from typing import TypeVar

T = TypeVar("T")


def filter_items(items: Sequence[T], search: str, keywords: Callable[[T], str]) -> list[T]:
    """Keep items whose keyword text contains the search text (case-insensitive).

    An empty search returns every item in its original order.
    """
    needle = search.lower()
    if not needle:
        return list(items)
    return [item for item in items if needle in keywords(item).lower()]


def total_rows(item_count: int, columns: int) -> int:
    """Number of grid rows needed for item_count items."""
    return (item_count + columns - 1) // columns


def max_scroll(item_count: int, columns: int, visible_rows: int) -> int:
    return max(0, total_rows(item_count, columns) - visible_rows)


def reconcile_scroll(
    selection: int | None,
    item_count: int,
    scroll_offset: int,
    columns: int,
    visible_rows: int,
) -> int:
    """Return a scroll offset that keeps the selected row visible.

    Args:
        selection: Index into the filtered items, or None for the "none" option
        item_count: Number of filtered items
        scroll_offset: Current first visible row
        columns: Items per grid row
        visible_rows: Rows that fit in the window

    Returns:
        New scroll offset, clamped to [0, max_scroll]
    """
    if selection is None:
        return 0

    selected_row = selection // columns
    if selected_row < scroll_offset:
        scroll_offset = selected_row
    elif selected_row >= scroll_offset + visible_rows:
        scroll_offset = selected_row - visible_rows + 1

    return max(0, min(scroll_offset, max_scroll(item_count, columns, visible_rows)))


def visible_row_range(
    item_count: int, scroll_offset: int, columns: int, visible_rows: int
) -> tuple[int, int]:
    """Return (start_row, end_row) of the rows to draw; end is exclusive."""
    rows = total_rows(item_count, columns)
    start = max(0, min(scroll_offset, rows))
    return start, min(start + visible_rows, rows)


def format_scroll_indicator(has_above: bool, has_below: bool) -> tuple[str | None, str | None]:
    """Format scroll indicators.

    Returns:
        Tuple of (above_indicator, below_indicator) - None if nothing hidden
    """
    above = "        ▲ more above ▲" if has_above else None
    below = "        ▼ more below ▼" if has_below else None
    return above, below
