"""Data models for hbt."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class FrequencyType(Enum):
    """How often a habit should be done."""

    DAILY = "daily"
    WEEKLY = "weekly"
    TIMES_PER_WEEK = "times_per_week"
    # Stored value this version does not know; never offered in the form
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> "FrequencyType":
        return cls.UNKNOWN

    @classmethod
    def choices(cls) -> list["FrequencyType"]:
        """Types the user can pick, in cycling order."""
        return [cls.DAILY, cls.WEEKLY, cls.TIMES_PER_WEEK]

    @property
    def label(self) -> str:
        return {
            FrequencyType.DAILY: "Daily",
            FrequencyType.WEEKLY: "Weekly",
            FrequencyType.TIMES_PER_WEEK: "Times per week",
            FrequencyType.UNKNOWN: "Unknown",
        }[self]

    def next(self) -> "FrequencyType":
        members = FrequencyType.choices()
        if self not in members:
            return members[0]
        return members[(members.index(self) + 1) % len(members)]

    def previous(self) -> "FrequencyType":
        members = FrequencyType.choices()
        if self not in members:
            return members[-1]
        return members[(members.index(self) - 1) % len(members)]


@dataclass(frozen=True)
class Category:
    """Immutable habit category."""

    id: int
    name: str
    color: str = "#6B7280"
    emoji: str = ""

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "color": self.color, "emoji": self.emoji}


@dataclass(frozen=True)
class Habit:
    """Immutable habit.

    An ``id`` of 0 marks a habit that has not been stored yet.
    """

    id: int
    name: str
    description: str = ""
    emoji: str = ""
    frequency_type: FrequencyType = FrequencyType.DAILY
    frequency_value: int = 1
    category: Category | None = None
    created_at: datetime | None = None
    archived_at: datetime | None = None

    @property
    def category_id(self) -> int | None:
        return self.category.id if self.category else None

    @property
    def is_new(self) -> bool:
        return self.id == 0

    def to_dict(self) -> dict:
        """Serialize to dict for display and export."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "emoji": self.emoji,
            "frequency_type": self.frequency_type.value,
            "frequency_value": self.frequency_value,
            "category": self.category.to_dict() if self.category else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "archived_at": self.archived_at.isoformat() if self.archived_at else None,
        }
