"""Group habits by category for display."""

from collections.abc import Sequence
from dataclasses import dataclass

from hbt.models import Category, Habit


@dataclass(frozen=True)
class HabitGroup:
    """Habits under one header; category is None for "Uncategorized"."""

    category: Category | None
    habits: tuple[Habit, ...]


def group_habits(habits: Sequence[Habit], categories: Sequence[Category]) -> list[HabitGroup]:
    """Partition habits into display groups.

    Groups follow the category order; categories without habits are left
    out. Habits without a category, or whose category is not loaded, go
    into a final uncategorized group. Load order is kept inside a group.
    """
    by_category: dict[int, list[Habit]] = {}
    known = {c.id for c in categories}
    uncategorized: list[Habit] = []

    for habit in habits:
        cat_id = habit.category_id
        if cat_id is not None and cat_id in known:
            by_category.setdefault(cat_id, []).append(habit)
        else:
            uncategorized.append(habit)

    groups = [
        HabitGroup(category=c, habits=tuple(by_category[c.id]))
        for c in categories
        if c.id in by_category
    ]
    if uncategorized:
        groups.append(HabitGroup(category=None, habits=tuple(uncategorized)))
    return groups


def display_order(habits: Sequence[Habit], categories: Sequence[Category]) -> list[Habit]:
    """Flattened grouped order - the order the list cursor moves through."""
    return [habit for group in group_habits(habits, categories) for habit in group.habits]
