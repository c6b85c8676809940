"""Storage protocols consumed by the habits tab."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from hbt.models import Category, Habit


@runtime_checkable
class HabitStore(Protocol):
    """Protocol for habit storage.

    Implement this to add new backends.
    """

    def list_habits(self) -> list[Habit]:
        """List habits that are not archived, oldest first."""
        ...

    def create_habit(self, habit: Habit) -> Habit:
        """Store a new habit. Returns it with the assigned id."""
        ...

    def update_habit(self, habit: Habit) -> Habit:
        """Replace the stored fields of an existing habit."""
        ...

    def archive_habit(self, id: int) -> None:
        """Soft-delete a habit; later listings omit it."""
        ...


@runtime_checkable
class CategoryStore(Protocol):
    """Protocol for category storage."""

    def list_categories(self) -> list[Category]:
        """List categories in display order."""
        ...

    def create_category(self, name: str, color: str, emoji: str = "") -> Category:
        """Create a category."""
        ...
