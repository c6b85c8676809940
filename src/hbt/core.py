"""Core habit and category services."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hbt.config import Config
from hbt.models import Category, FrequencyType, Habit

if TYPE_CHECKING:
    from hbt.backends.base import CategoryStore, HabitStore


def create_backend(config: Config):
    """Open the configured SQLite database."""
    from hbt.backends.sqlite import SqliteBackend

    return SqliteBackend(config.database_path)


class HabitService:
    """Habit operations used by the habits tab - routes to a store."""

    def __init__(self, store: HabitStore):
        self._store = store

    def list(self) -> list[Habit]:
        return self._store.list_habits()

    def create(self, habit: Habit) -> Habit:
        """Store a new habit and return it with its assigned id."""
        if habit.id != 0:
            raise ValueError(f"Habit already stored: {habit.id}")
        return self._store.create_habit(habit)

    def update(self, habit: Habit) -> Habit:
        return self._store.update_habit(habit)

    def save(self, habit: Habit) -> Habit:
        """Create or update depending on whether the habit has an id."""
        return self.create(habit) if habit.is_new else self.update(habit)

    def archive(self, id: int) -> None:
        self._store.archive_habit(id)


class CategoryService:
    """Read access to categories for the habits tab."""

    def __init__(self, store: CategoryStore):
        self._store = store

    def list(self) -> list[Category]:
        return self._store.list_categories()

    def create(self, name: str, color: str, emoji: str = "") -> Category:
        return self._store.create_category(name, color, emoji)


# Demo data for `hbt seed`: (name, color)
SEED_CATEGORIES: list[tuple[str, str]] = [
    ("Health", "#10B981"),
    ("Work", "#3B82F6"),
    ("Personal", "#F59E0B"),
]

# (name, description, frequency type, frequency value, category)
SEED_HABITS: list[tuple[str, str, FrequencyType, int, str]] = [
    ("Morning Exercise", "30 min workout", FrequencyType.DAILY, 1, "Health"),
    ("Read", "Read for 20 minutes", FrequencyType.DAILY, 1, "Personal"),
    ("Meditate", "10 min meditation", FrequencyType.DAILY, 1, "Health"),
    ("Weekly Review", "Review goals and progress", FrequencyType.WEEKLY, 1, "Work"),
    ("Learn Something", "Study or take a course", FrequencyType.TIMES_PER_WEEK, 3, "Personal"),
    ("Drink Water", "8 glasses of water", FrequencyType.DAILY, 1, "Health"),
]


def seed_demo_data(backend) -> tuple[int, int]:
    """Insert demo categories and habits, skipping names that already exist.

    Returns (categories_created, habits_created).
    """
    categories: dict[str, Category] = {}
    cats_created = 0
    for name, color in SEED_CATEGORIES:
        existing = backend.find_category(name)
        if existing is None:
            existing = backend.create_category(name, color)
            cats_created += 1
        categories[name] = existing

    habits_created = 0
    for name, description, freq_type, freq_value, category in SEED_HABITS:
        if backend.find_habit_id(name) is not None:
            continue
        backend.create_habit(
            Habit(
                id=0,
                name=name,
                description=description,
                frequency_type=freq_type,
                frequency_value=freq_value,
                category=categories[category],
            )
        )
        habits_created += 1

    return cats_created, habits_created
