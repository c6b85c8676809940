"""Create/edit form for a habit.

The form is an immutable :class:`FormState`; :func:`update_form` takes a key
and returns the next state together with a :data:`FormResult`. The owner
reacts to ``FormSubmitted`` / ``FormCancelled`` once and then drops the form.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum

from hbt.models import Category, FrequencyType, Habit
from hbt.ui.keys import ARROW_DOWN, ARROW_UP, DEFAULT_KEYMAP, KeyMap, is_printable
from hbt.ui.picker import PickerChosen, PickerClosed, PickerState, category_picker, emoji_picker

MIN_TIMES_PER_WEEK = 1
MAX_TIMES_PER_WEEK = 7
MAX_VALUE_DIGITS = 2

NAME_REQUIRED = "Name is required"


class Field(Enum):
    """Form fields in traversal order."""

    NAME = "name"
    DESCRIPTION = "description"
    FREQUENCY_TYPE = "frequency_type"
    FREQUENCY_VALUE = "frequency_value"
    CATEGORY = "category"
    EMOJI = "emoji"

    @property
    def label(self) -> str:
        return {
            Field.NAME: "Name",
            Field.DESCRIPTION: "Description",
            Field.FREQUENCY_TYPE: "Frequency",
            Field.FREQUENCY_VALUE: "Times/week",
            Field.CATEGORY: "Category",
            Field.EMOJI: "Emoji",
        }[self]


TEXT_FIELDS = (Field.NAME, Field.DESCRIPTION)
PICKER_FIELDS = (Field.CATEGORY, Field.EMOJI)


@dataclass(frozen=True)
class FormPending:
    """Form stays open."""


@dataclass(frozen=True)
class FormSubmitted:
    """Form accepted; ``habit.id`` is 0 for a new habit."""

    habit: Habit


@dataclass(frozen=True)
class FormCancelled:
    """Form discarded; nothing should be stored."""


FormResult = FormPending | FormSubmitted | FormCancelled


@dataclass(frozen=True)
class FormState:
    habit: Habit | None = None
    categories: tuple[Category, ...] = ()
    name: str = ""
    description: str = ""
    frequency_type: FrequencyType = FrequencyType.DAILY
    frequency_value: str = "1"
    category: Category | None = None
    emoji: str = ""
    focus: Field = Field.NAME
    category_picker: PickerState | None = None
    emoji_picker: PickerState | None = None
    error: str = ""
    width: int = 0
    height: int = 0

    @property
    def is_new(self) -> bool:
        return self.habit is None or self.habit.is_new

    @property
    def has_modal(self) -> bool:
        return self.category_picker is not None or self.emoji_picker is not None


def new_form(
    habit: Habit | None,
    categories: Sequence[Category],
    width: int = 0,
    height: int = 0,
) -> FormState:
    """Build a form, seeded from habit when editing."""
    if habit is None:
        return FormState(categories=tuple(categories), width=width, height=height)

    # Resolve against the loaded categories so the picker can find it
    category = next((c for c in categories if c.id == habit.category_id), habit.category)
    return FormState(
        habit=habit,
        categories=tuple(categories),
        name=habit.name,
        description=habit.description,
        frequency_type=habit.frequency_type,
        frequency_value=str(habit.frequency_value),
        category=category,
        emoji=habit.emoji,
        width=width,
        height=height,
    )


def applicable_fields(form: FormState) -> list[Field]:
    """Fields the user can focus; times/week only exists for that frequency."""
    return [
        f
        for f in Field
        if f != Field.FREQUENCY_VALUE or form.frequency_type == FrequencyType.TIMES_PER_WEEK
    ]


def focus_next(form: FormState) -> FormState:
    fields = applicable_fields(form)
    index = fields.index(form.focus) if form.focus in fields else -1
    return replace(form, focus=fields[(index + 1) % len(fields)])


def focus_previous(form: FormState) -> FormState:
    fields = applicable_fields(form)
    index = fields.index(form.focus) if form.focus in fields else 0
    return replace(form, focus=fields[(index - 1) % len(fields)])


def frequency_value(form: FormState) -> int:
    """Parsed times/week, clamped to a sensible range."""
    if form.frequency_type != FrequencyType.TIMES_PER_WEEK:
        return 1
    try:
        value = int(form.frequency_value)
    except ValueError:
        value = MIN_TIMES_PER_WEEK
    return max(MIN_TIMES_PER_WEEK, min(value, MAX_TIMES_PER_WEEK))


def build_habit(form: FormState) -> Habit:
    """Habit described by the current field values."""
    base = form.habit or Habit(id=0, name="")
    return replace(
        base,
        name=form.name.strip(),
        description=form.description.strip(),
        emoji=form.emoji,
        frequency_type=form.frequency_type,
        frequency_value=frequency_value(form),
        category=form.category,
    )


def submit(form: FormState) -> tuple[FormState, FormResult]:
    if not form.name.strip():
        return replace(form, error=NAME_REQUIRED, focus=Field.NAME), FormPending()
    return replace(form, error=""), FormSubmitted(build_habit(form))


def open_picker(form: FormState) -> FormState:
    if form.focus == Field.CATEGORY:
        picker = category_picker(form.categories)
        return replace(form, category_picker=picker.open(form.category))
    if form.focus == Field.EMOJI:
        picker = emoji_picker()
        return replace(form, emoji_picker=picker.open(form.emoji or None))
    return form


def update_form(
    form: FormState, key: str, keymap: KeyMap = DEFAULT_KEYMAP
) -> tuple[FormState, FormResult]:
    """Handle one key press."""
    if form.category_picker is not None:
        return _update_category_picker(form, key), FormPending()
    if form.emoji_picker is not None:
        return _update_emoji_picker(form, key), FormPending()

    if key in keymap.back:
        return form, FormCancelled()
    if key in keymap.submit:
        return submit(form)
    if key in keymap.next_field or key in ARROW_DOWN:
        return focus_next(form), FormPending()
    if key in keymap.prev_field or key in ARROW_UP:
        return focus_previous(form), FormPending()

    if form.focus in PICKER_FIELDS:
        if key in keymap.enter or key in keymap.space:
            return open_picker(form), FormPending()
        return form, FormPending()

    if key in keymap.enter:
        return submit(form)

    if form.focus == Field.FREQUENCY_TYPE:
        return _update_frequency_type(form, key, keymap), FormPending()
    if form.focus == Field.FREQUENCY_VALUE:
        return _update_frequency_value(form, key, keymap), FormPending()
    return _update_text(form, key, keymap), FormPending()


def _update_text(form: FormState, key: str, keymap: KeyMap) -> FormState:
    attr = form.focus.value
    value = getattr(form, attr)
    if key in keymap.backspace:
        value = value[:-1]
    elif is_printable(key):
        value += key
    else:
        return form
    error = "" if form.focus == Field.NAME else form.error
    return replace(form, **{attr: value, "error": error})


def _update_frequency_type(form: FormState, key: str, keymap: KeyMap) -> FormState:
    if key in keymap.right or key in keymap.space:
        return replace(form, frequency_type=form.frequency_type.next())
    if key in keymap.left:
        return replace(form, frequency_type=form.frequency_type.previous())
    return form


def _update_frequency_value(form: FormState, key: str, keymap: KeyMap) -> FormState:
    if key in keymap.backspace:
        return replace(form, frequency_value=form.frequency_value[:-1])
    if key.isdigit() and len(key) == 1 and len(form.frequency_value) < MAX_VALUE_DIGITS:
        return replace(form, frequency_value=form.frequency_value + key)
    return form


def _update_category_picker(form: FormState, key: str) -> FormState:
    picker = category_picker(form.categories)
    state, result = picker.update(form.category_picker, key)
    if isinstance(result, PickerChosen):
        return replace(form, category=result.item, category_picker=None)
    if isinstance(result, PickerClosed):
        return replace(form, category_picker=None)
    return replace(form, category_picker=state)


def _update_emoji_picker(form: FormState, key: str) -> FormState:
    picker = emoji_picker()
    state, result = picker.update(form.emoji_picker, key)
    if isinstance(result, PickerChosen):
        return replace(form, emoji=result.item or "", emoji_picker=None)
    if isinstance(result, PickerClosed):
        return replace(form, emoji_picker=None)
    return replace(form, emoji_picker=state)
