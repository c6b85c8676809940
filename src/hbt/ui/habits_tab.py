"""Habits tab state machine.

Every event goes through :meth:`HabitsTab.update`, which returns the next
:class:`HabitsTabState` and optionally a command. A command is a callable
that performs one storage call and returns the completion message; the host
runs it off the input thread and feeds the message back into ``update``.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum

from hbt.core import CategoryService, HabitService
from hbt.models import Category, Habit
from hbt.ui.form import FormCancelled, FormState, FormSubmitted, new_form, update_form
from hbt.ui.grouping import display_order
from hbt.ui.keys import DEFAULT_KEYMAP, KeyMap

logger = logging.getLogger("hbt.habits")

# Failures a store may raise; these end up in the error slot
STORE_ERRORS = (sqlite3.Error, OSError, KeyError, ValueError)


class Mode(Enum):
    LIST = "list"
    FORM = "form"
    CONFIRM_DELETE = "confirm_delete"


@dataclass(frozen=True)
class HabitsLoaded:
    habits: tuple[Habit, ...] = ()
    categories: tuple[Category, ...] = ()
    error: Exception | None = None


@dataclass(frozen=True)
class HabitSaved:
    habit: Habit | None = None
    error: Exception | None = None


@dataclass(frozen=True)
class HabitArchived:
    id: int
    error: Exception | None = None


@dataclass(frozen=True)
class KeyPressed:
    key: str


@dataclass(frozen=True)
class WindowResized:
    width: int
    height: int


Message = HabitsLoaded | HabitSaved | HabitArchived | KeyPressed | WindowResized
Command = Callable[[], Message]


@dataclass(frozen=True)
class HabitsTabState:
    habits: tuple[Habit, ...] = ()
    categories: tuple[Category, ...] = ()
    cursor: int = 0
    mode: Mode = Mode.LIST
    error: Exception | None = None
    form: FormState | None = None
    saving: bool = False
    width: int = 0
    height: int = 0

    @property
    def display_habits(self) -> list[Habit]:
        """Habits in the order they are rendered (and the cursor indexes)."""
        return display_order(self.habits, self.categories)

    @property
    def current_habit(self) -> Habit | None:
        ordered = self.display_habits
        if ordered and 0 <= self.cursor < len(ordered):
            return ordered[self.cursor]
        return None


class HabitsTab:
    """Event handling for the habits tab."""

    def __init__(
        self,
        habits: HabitService,
        categories: CategoryService,
        keymap: KeyMap = DEFAULT_KEYMAP,
    ):
        self._habits = habits
        self._categories = categories
        self.keys = keymap

    def init(self) -> Command:
        return self.load

    # Commands

    def load(self) -> HabitsLoaded:
        """Fetch habits and categories together; any failure drops both."""
        try:
            habits = self._habits.list()
            categories = self._categories.list()
        except STORE_ERRORS as e:
            logger.exception("Failed to load habits")
            return HabitsLoaded(error=e)
        return HabitsLoaded(habits=tuple(habits), categories=tuple(categories))

    def save(self, habit: Habit) -> Command:
        def run() -> HabitSaved:
            try:
                saved = self._habits.save(habit)
            except STORE_ERRORS as e:
                logger.exception("Failed to save habit %r", habit.name)
                return HabitSaved(habit=habit, error=e)
            return HabitSaved(habit=saved)

        return run

    def archive(self, id: int) -> Command:
        def run() -> HabitArchived:
            try:
                self._habits.archive(id)
            except STORE_ERRORS as e:
                logger.exception("Failed to archive habit %d", id)
                return HabitArchived(id=id, error=e)
            return HabitArchived(id=id)

        return run

    # Update

    def update(
        self, state: HabitsTabState, msg: Message
    ) -> tuple[HabitsTabState, Command | None]:
        if isinstance(msg, HabitsLoaded):
            return self._on_loaded(state, msg), None

        if isinstance(msg, HabitSaved):
            # TODO: reopen the form with the error once failed-save behavior is settled
            state = replace(state, mode=Mode.LIST, form=None, saving=False)
            if msg.error is not None:
                return replace(state, error=msg.error), None
            return state, self.load

        if isinstance(msg, HabitArchived):
            state = replace(state, mode=Mode.LIST, saving=False)
            if msg.error is not None:
                return replace(state, error=msg.error), None
            count = len(state.habits)
            cursor = state.cursor
            if cursor >= count - 1 and cursor > 0:
                cursor -= 1
            return replace(state, cursor=cursor), self.load

        if isinstance(msg, WindowResized):
            form = state.form
            if form is not None:
                form = replace(form, width=msg.width, height=msg.height)
            return replace(state, width=msg.width, height=msg.height, form=form), None

        if isinstance(msg, KeyPressed):
            return self._on_key(state, msg.key)

        return state, None

    def _on_loaded(self, state: HabitsTabState, msg: HabitsLoaded) -> HabitsTabState:
        if msg.error is not None:
            return replace(state, error=msg.error)
        count = len(msg.habits)
        cursor = max(0, min(state.cursor, count - 1))
        logger.debug("Loaded %d habits, %d categories", count, len(msg.categories))
        return replace(
            state,
            habits=msg.habits,
            categories=msg.categories,
            cursor=cursor,
            error=None,
        )

    def _on_key(self, state: HabitsTabState, key: str) -> tuple[HabitsTabState, Command | None]:
        keys = self.keys

        if state.mode == Mode.FORM and state.form is not None:
            if state.saving:
                return state, None
            form, result = update_form(state.form, key, keys)
            if isinstance(result, FormCancelled):
                return replace(state, mode=Mode.LIST, form=None), None
            if isinstance(result, FormSubmitted):
                return replace(state, form=form, saving=True), self.save(result.habit)
            return replace(state, form=form), None

        if state.mode == Mode.CONFIRM_DELETE:
            if state.saving:
                return state, None
            if key in keys.confirm:
                habit = state.current_habit
                if habit is not None:
                    return replace(state, saving=True), self.archive(habit.id)
            elif key in keys.cancel or key in keys.back:
                return replace(state, mode=Mode.LIST), None
            return state, None

        count = len(state.habits)
        if key in keys.up:
            if state.cursor > 0:
                return replace(state, cursor=state.cursor - 1), None
        elif key in keys.down:
            if state.cursor < count - 1:
                return replace(state, cursor=state.cursor + 1), None
        elif key in keys.add:
            form = new_form(None, state.categories, state.width, state.height)
            return replace(state, mode=Mode.FORM, form=form), None
        elif key in keys.edit:
            habit = state.current_habit
            if habit is not None:
                form = new_form(habit, state.categories, state.width, state.height)
                return replace(state, mode=Mode.FORM, form=form), None
        elif key in keys.delete:
            if state.current_habit is not None:
                return replace(state, mode=Mode.CONFIRM_DELETE), None
        elif key in keys.reload:
            return state, self.load
        return state, None


def is_focused(state: HabitsTabState) -> bool:
    """True while the tab captures all key input (the form is open)."""
    return state.mode == Mode.FORM
