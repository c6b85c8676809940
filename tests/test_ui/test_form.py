"""Tests for the habit form."""

from dataclasses import replace

import pytest
import readchar

from hbt.emoji import COMMON_EMOJIS
from hbt.models import Category, FrequencyType, Habit
from hbt.ui.form import (
    NAME_REQUIRED,
    Field,
    FormCancelled,
    FormPending,
    FormSubmitted,
    applicable_fields,
    build_habit,
    new_form,
    update_form,
)

CATEGORIES = (Category(id=1, name="Health"), Category(id=2, name="Work"))


def type_keys(form, *keys):
    result = FormPending()
    for key in keys:
        form, result = update_form(form, key)
    return form, result


def type_text(form, text):
    return type_keys(form, *text)


class TestFieldCycling:
    def test_times_per_week_field_hidden_for_daily(self):
        form = new_form(None, CATEGORIES)
        assert Field.FREQUENCY_VALUE not in applicable_fields(form)

    def test_tab_visits_fields_in_order(self):
        form = new_form(None, CATEGORIES)
        seen = [form.focus]
        for _ in range(4):
            form, _ = update_form(form, readchar.key.TAB)
            seen.append(form.focus)
        assert seen == [
            Field.NAME,
            Field.DESCRIPTION,
            Field.FREQUENCY_TYPE,
            Field.CATEGORY,
            Field.EMOJI,
        ]

    def test_focus_wraps(self):
        form = new_form(None, CATEGORIES)
        form, _ = update_form(form, readchar.key.SHIFT_TAB)
        assert form.focus == Field.EMOJI
        form, _ = update_form(form, readchar.key.TAB)
        assert form.focus == Field.NAME

    def test_times_per_week_field_included_when_selected(self):
        form = new_form(None, CATEGORIES)
        form, _ = type_keys(form, readchar.key.DOWN, readchar.key.DOWN)
        assert form.focus == Field.FREQUENCY_TYPE
        form, _ = type_keys(form, readchar.key.RIGHT, readchar.key.RIGHT)
        assert form.frequency_type == FrequencyType.TIMES_PER_WEEK
        form, _ = update_form(form, readchar.key.DOWN)
        assert form.focus == Field.FREQUENCY_VALUE
        form, _ = update_form(form, readchar.key.UP)
        assert form.focus == Field.FREQUENCY_TYPE

    def test_frequency_type_cycles_backwards(self):
        form = new_form(None, CATEGORIES)
        form, _ = type_keys(form, readchar.key.TAB, readchar.key.TAB, readchar.key.LEFT)
        assert form.frequency_type == FrequencyType.TIMES_PER_WEEK


class TestTextInput:
    def test_typing_name_including_j_and_k(self):
        form, _ = type_text(new_form(None, CATEGORIES), "jog k")
        assert form.name == "jog k"
        assert form.focus == Field.NAME

    def test_backspace(self):
        form, _ = type_keys(new_form(None, CATEGORIES), "a", "b", readchar.key.BACKSPACE)
        assert form.name == "a"

    def test_frequency_value_digits_only(self):
        form = new_form(None, CATEGORIES)
        form = replace(form, focus=Field.FREQUENCY_VALUE, frequency_type=FrequencyType.TIMES_PER_WEEK)
        form, _ = type_keys(form, readchar.key.BACKSPACE, "x", "3")
        assert form.frequency_value == "3"


class TestSubmit:
    def test_empty_name_is_refused(self):
        form, result = update_form(new_form(None, CATEGORIES), "\r")
        assert isinstance(result, FormPending)
        assert form.error == NAME_REQUIRED

    def test_blank_name_is_refused_with_ctrl_s(self):
        form, _ = type_text(new_form(None, CATEGORIES), "   ")
        form, result = update_form(form, readchar.key.CTRL_S)
        assert isinstance(result, FormPending)
        assert form.error == NAME_REQUIRED

    def test_typing_clears_error(self):
        form, _ = update_form(new_form(None, CATEGORIES), "\r")
        form, _ = update_form(form, "R")
        assert form.error == ""

    def test_submit_new_habit(self):
        form, _ = type_text(new_form(None, CATEGORIES), "Read")
        form, _ = update_form(form, readchar.key.TAB)
        form, _ = type_text(form, "20 pages")
        _, result = update_form(form, "\r")

        assert isinstance(result, FormSubmitted)
        assert result.habit.id == 0
        assert result.habit.name == "Read"
        assert result.habit.description == "20 pages"
        assert result.habit.frequency_type == FrequencyType.DAILY
        assert result.habit.frequency_value == 1

    def test_submit_keeps_identity_when_editing(self):
        habit = Habit(id=7, name="Run", category=CATEGORIES[0], emoji="🏃")
        form = new_form(habit, CATEGORIES)
        form, _ = type_text(form, "!")
        _, result = update_form(form, readchar.key.CTRL_S)

        assert result.habit.id == 7
        assert result.habit.name == "Run!"
        assert result.habit.category == CATEGORIES[0]
        assert result.habit.emoji == "🏃"

    @pytest.mark.parametrize("raw, expected", [("3", 3), ("", 1), ("0", 1), ("12", 7)])
    def test_times_per_week_value_is_clamped(self, raw, expected):
        form = new_form(
            Habit(id=1, name="Gym", frequency_type=FrequencyType.TIMES_PER_WEEK), CATEGORIES
        )
        form = replace(form, frequency_value=raw)
        assert build_habit(form).frequency_value == expected

    def test_escape_cancels(self):
        form, _ = type_text(new_form(None, CATEGORIES), "Read")
        _, result = update_form(form, readchar.key.ESC)
        assert isinstance(result, FormCancelled)


class TestPickers:
    def _focus(self, form, field):
        while form.focus != field:
            form, _ = update_form(form, readchar.key.TAB)
        return form

    def test_enter_on_category_opens_picker(self):
        form = self._focus(new_form(None, CATEGORIES), Field.CATEGORY)
        form, result = update_form(form, "\r")
        assert isinstance(result, FormPending)
        assert form.category_picker is not None
        assert form.has_modal

    def test_category_picker_selects_category(self):
        form = self._focus(new_form(None, CATEGORIES), Field.CATEGORY)
        form, _ = type_keys(form, " ", readchar.key.DOWN, readchar.key.DOWN, "\r")
        assert form.category_picker is None
        assert form.category == CATEGORIES[1]

    def test_keys_route_to_open_picker(self):
        form = self._focus(new_form(None, CATEGORIES), Field.EMOJI)
        form, _ = type_keys(form, "\r", "s", "l", "e", "e", "p")
        assert form.emoji_picker.search == "sleep"
        assert form.name == ""
        assert form.focus == Field.EMOJI

    def test_escape_in_picker_only_closes_picker(self):
        form = self._focus(new_form(None, CATEGORIES), Field.EMOJI)
        form, result = type_keys(form, "\r", readchar.key.ESC)
        assert isinstance(result, FormPending)
        assert form.emoji_picker is None
        assert form.emoji == ""

    def test_emoji_pick_and_clear(self):
        form = self._focus(new_form(None, CATEGORIES), Field.EMOJI)
        form, _ = type_keys(form, "\r", readchar.key.RIGHT, "\r")
        assert form.emoji == COMMON_EMOJIS[0]

        form, _ = type_keys(form, "\r", readchar.key.LEFT, "\r")
        assert form.emoji == ""

    def test_ctrl_s_in_picker_does_not_submit(self):
        form, _ = type_text(new_form(None, CATEGORIES), "Read")
        form = self._focus(form, Field.EMOJI)
        form, result = type_keys(form, "\r", readchar.key.CTRL_S)
        assert isinstance(result, FormPending)
        assert form.emoji_picker is not None
