"""Pytest fixtures for hbt tests."""

import sqlite3
from dataclasses import replace

import pytest

from hbt.models import Category, Habit


@pytest.fixture(autouse=True)
def clear_caches():
    """Clear module-level caches before each test."""
    from hbt.config import clear_config_cache

    clear_config_cache()

    yield

    clear_config_cache()


class MemoryStore:
    """In-memory HabitStore/CategoryStore with switchable failures."""

    def __init__(self, habits=None, categories=None):
        self.habits: list[Habit] = list(habits or [])
        self.categories: list[Category] = list(categories or [])
        self.fail: set[str] = set()
        self.calls: list[str] = []
        self._next_id = max((h.id for h in self.habits), default=0) + 1

    def _check(self, op: str) -> None:
        self.calls.append(op)
        if op in self.fail:
            raise sqlite3.OperationalError(f"{op} failed")

    def list_habits(self) -> list[Habit]:
        self._check("list_habits")
        return list(self.habits)

    def create_habit(self, habit: Habit) -> Habit:
        self._check("create_habit")
        stored = replace(habit, id=self._next_id)
        self._next_id += 1
        self.habits.append(stored)
        return stored

    def update_habit(self, habit: Habit) -> Habit:
        self._check("update_habit")
        for i, existing in enumerate(self.habits):
            if existing.id == habit.id:
                self.habits[i] = habit
                return habit
        raise KeyError(f"Habit not found: {habit.id}")

    def archive_habit(self, id: int) -> None:
        self._check("archive_habit")
        before = len(self.habits)
        self.habits = [h for h in self.habits if h.id != id]
        if len(self.habits) == before:
            raise KeyError(f"Habit not found: {id}")

    def list_categories(self) -> list[Category]:
        self._check("list_categories")
        return list(self.categories)

    def create_category(self, name: str, color: str, emoji: str = "") -> Category:
        self._check("create_category")
        category = Category(id=len(self.categories) + 1, name=name, color=color, emoji=emoji)
        self.categories.append(category)
        return category


@pytest.fixture
def health() -> Category:
    return Category(id=1, name="Health", color="#10B981", emoji="💪")


@pytest.fixture
def work() -> Category:
    return Category(id=2, name="Work", color="#3B82F6")


@pytest.fixture
def store(health, work) -> MemoryStore:
    return MemoryStore(
        habits=[
            Habit(id=1, name="Read"),
            Habit(id=2, name="Run", category=health),
            Habit(id=3, name="Inbox zero", category=work),
            Habit(id=4, name="Stretch", category=health),
        ],
        categories=[health, work],
    )
