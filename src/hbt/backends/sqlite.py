"""SQLite backend."""

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

from hbt.models import Category, FrequencyType, Habit

logger = logging.getLogger("hbt.sqlite")


class SqliteBackend:
    """SQLite backend for habits and categories."""

    SCHEMA = """
        CREATE TABLE IF NOT EXISTS categories (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE,
            color TEXT NOT NULL DEFAULT '#6B7280',
            emoji TEXT NOT NULL DEFAULT '',
            sort_order INTEGER NOT NULL DEFAULT 0
        );
        CREATE TABLE IF NOT EXISTS habits (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            emoji TEXT NOT NULL DEFAULT '',
            frequency_type TEXT NOT NULL DEFAULT 'daily',
            frequency_value INTEGER NOT NULL DEFAULT 1,
            category_id INTEGER REFERENCES categories(id) ON DELETE SET NULL,
            created_at TEXT NOT NULL,
            archived_at TEXT
        );
        CREATE INDEX IF NOT EXISTS idx_habits_archived ON habits(archived_at);
    """

    HABIT_COLUMNS = """
        h.id, h.name, h.description, h.emoji, h.frequency_type, h.frequency_value,
        h.created_at, h.archived_at, c.id, c.name, c.color, c.emoji
    """

    def __init__(self, db_path: Path):
        self._path = db_path
        self._conn: sqlite3.Connection | None = None
        self._ensure_schema()

    def __del__(self) -> None:
        """Clean up connection on garbage collection."""
        self.close()

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    @property
    def path(self) -> Path:
        return self._path

    # Habits

    def list_habits(self) -> list[Habit]:
        query = f"""
            SELECT {self.HABIT_COLUMNS}
            FROM habits h LEFT JOIN categories c ON c.id = h.category_id
            WHERE h.archived_at IS NULL
            ORDER BY h.created_at ASC, h.id ASC
        """
        with self._connect() as conn:
            rows = conn.execute(query).fetchall()
        return [self._row_to_habit(row) for row in rows]

    def get_habit(self, id: int) -> Habit | None:
        query = f"""
            SELECT {self.HABIT_COLUMNS}
            FROM habits h LEFT JOIN categories c ON c.id = h.category_id
            WHERE h.id = ?
        """
        with self._connect() as conn:
            row = conn.execute(query, (id,)).fetchone()
        return self._row_to_habit(row) if row else None

    def create_habit(self, habit: Habit) -> Habit:
        created_at = habit.created_at or datetime.now()
        with self._connect() as conn:
            cursor = conn.execute(
                "INSERT INTO habits (name, description, emoji, frequency_type, frequency_value, category_id, created_at) VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    habit.name,
                    habit.description,
                    habit.emoji,
                    habit.frequency_type.value,
                    habit.frequency_value,
                    habit.category_id,
                    created_at.isoformat(),
                ),
            )
            new_id = cursor.lastrowid
        logger.info("Created habit %d (%s)", new_id, habit.name)

        stored = self.get_habit(new_id)
        if not stored:
            raise KeyError(f"Habit not found: {new_id}")
        return stored

    def update_habit(self, habit: Habit) -> Habit:
        with self._connect() as conn:
            cursor = conn.execute(
                "UPDATE habits SET name = ?, description = ?, emoji = ?, frequency_type = ?, frequency_value = ?, category_id = ? WHERE id = ?",
                (
                    habit.name,
                    habit.description,
                    habit.emoji,
                    habit.frequency_type.value,
                    habit.frequency_value,
                    habit.category_id,
                    habit.id,
                ),
            )
            if cursor.rowcount == 0:
                raise KeyError(f"Habit not found: {habit.id}")
        logger.info("Updated habit %d", habit.id)

        stored = self.get_habit(habit.id)
        if not stored:
            raise KeyError(f"Habit not found: {habit.id}")
        return stored

    def archive_habit(self, id: int) -> None:
        with self._connect() as conn:
            cursor = conn.execute(
                "UPDATE habits SET archived_at = ? WHERE id = ? AND archived_at IS NULL",
                (datetime.now().isoformat(), id),
            )
            if cursor.rowcount == 0:
                raise KeyError(f"Habit not found: {id}")
        logger.info("Archived habit %d", id)

    def find_habit_id(self, name: str) -> int | None:
        """Look up a habit id by exact name (used by seeding)."""
        with self._connect() as conn:
            row = conn.execute("SELECT id FROM habits WHERE name = ?", (name,)).fetchone()
        return row[0] if row else None

    # Categories

    def list_categories(self) -> list[Category]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT id, name, color, emoji FROM categories ORDER BY sort_order ASC, id ASC"
            ).fetchall()
        return [Category(id=id, name=name, color=color, emoji=emoji) for id, name, color, emoji in rows]

    def create_category(self, name: str, color: str, emoji: str = "") -> Category:
        with self._connect() as conn:
            next_order = conn.execute(
                "SELECT COALESCE(MAX(sort_order), 0) + 1 FROM categories"
            ).fetchone()[0]
            cursor = conn.execute(
                "INSERT INTO categories (name, color, emoji, sort_order) VALUES (?, ?, ?, ?)",
                (name, color, emoji, next_order),
            )
            new_id = cursor.lastrowid
        return Category(id=new_id, name=name, color=color, emoji=emoji)

    def find_category(self, name: str) -> Category | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT id, name, color, emoji FROM categories WHERE name = ?", (name,)
            ).fetchone()
        return Category(*row) if row else None

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Get database connection, reusing existing connection if available."""
        if self._conn is None:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            # Storage calls run on the shell's single worker thread
            self._conn = sqlite3.connect(self._path, check_same_thread=False)
            self._conn.execute("PRAGMA journal_mode = WAL")
            self._conn.execute("PRAGMA busy_timeout = 5000")
            self._conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield self._conn
            self._conn.commit()
        except Exception:
            self._conn.rollback()
            raise

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.executescript(self.SCHEMA)

    def _row_to_habit(self, row: tuple) -> Habit:
        (
            id,
            name,
            description,
            emoji,
            frequency_type,
            frequency_value,
            created_at,
            archived_at,
            cat_id,
            cat_name,
            cat_color,
            cat_emoji,
        ) = row
        category = (
            Category(id=cat_id, name=cat_name, color=cat_color, emoji=cat_emoji)
            if cat_id is not None
            else None
        )
        freq = FrequencyType(frequency_type)
        if freq == FrequencyType.UNKNOWN:
            logger.warning("Habit %d has unknown frequency type %r", id, frequency_type)
        return Habit(
            id=id,
            name=name,
            description=description,
            emoji=emoji,
            frequency_type=freq,
            frequency_value=frequency_value,
            category=category,
            created_at=datetime.fromisoformat(created_at),
            archived_at=datetime.fromisoformat(archived_at) if archived_at else None,
        )
