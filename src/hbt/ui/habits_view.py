"""Rendering for the habits tab.

Every function here is pure: it reads state and a :class:`Theme` and
returns Rich markup. The host decides where the text goes (panel, overlay).
"""

from __future__ import annotations

from rich.markup import escape

from hbt.models import FrequencyType, Habit
from hbt.ui.form import Field, FormState, applicable_fields
from hbt.ui.grouping import group_habits
from hbt.ui.habits_tab import HabitsTabState, Mode
from hbt.ui.panel_builder import format_scroll_indicator, visible_row_range
from hbt.ui.picker import Picker, PickerState, category_picker, emoji_picker
from hbt.ui.theme import Theme

SEPARATOR = "─" * 32
FOLDER_EMOJI = "📁"
UNCATEGORIZED = "Uncategorized"
EMPTY_HINT = "No habits yet. Press 'a' to add one."
LIST_HINT = "a: add  e: edit  d: delete  r: reload"
CONFIRM_HINT = "y: confirm  n: cancel"
FORM_HINT = "tab/↑↓: move  ←→/space: change  enter: save  ctrl+s: save  esc: cancel"
PICKER_FIELD_HINT = "enter/space: open picker"
EMOJI_MODAL_HINT = "↑↓←→: navigate  pgup/pgdn: scroll  enter: select  esc: cancel"
CATEGORY_MODAL_HINT = "↑↓: navigate  type to search  enter: select  esc: cancel"
NONE_LABEL = "(none)"


def format_frequency(habit: Habit) -> str:
    if habit.frequency_type == FrequencyType.DAILY:
        return "(daily)"
    if habit.frequency_type == FrequencyType.WEEKLY:
        return "(weekly)"
    if habit.frequency_type == FrequencyType.TIMES_PER_WEEK:
        return f"({habit.frequency_value}x/week)"
    return ""


def render_habit_line(habit: Habit, selected: bool, theme: Theme) -> str:
    cursor = "> " if selected else "  "
    emoji = f"{escape(habit.emoji)} " if habit.emoji else ""
    name = theme.render("selected" if selected else "normal", habit.name)
    frequency = format_frequency(habit)
    suffix = f" {theme.render('muted', frequency)}" if frequency else ""
    return f"{cursor}{emoji}{name}{suffix}"


def render_list_content(state: HabitsTabState, theme: Theme, hints: bool = True) -> str:
    if not state.habits:
        return theme.render("muted", EMPTY_HINT)

    lines: list[str] = []
    index = 0
    for i, group in enumerate(group_habits(state.habits, state.categories)):
        if i > 0:
            lines.append(theme.render("muted", SEPARATOR))

        if group.category is not None:
            cat = group.category
            header = f"{cat.name} {cat.emoji or FOLDER_EMOJI}"
            lines.append(theme.colored(cat.color, header, bold=True))
        else:
            lines.append(theme.render("muted", UNCATEGORIZED))

        for habit in group.habits:
            lines.append(render_habit_line(habit, index == state.cursor, theme))
            index += 1

    if hints:
        lines.append("")
        lines.append(theme.render("muted", LIST_HINT))
    return "\n".join(lines)


def render_list(state: HabitsTabState, theme: Theme) -> str:
    return theme.render("title", "Manage Habits") + "\n\n" + render_list_content(state, theme)


def render_confirm_delete_content(state: HabitsTabState, theme: Theme) -> str:
    habit = state.current_habit
    name = habit.name if habit else ""
    return "\n".join(
        [
            f"Are you sure you want to delete '{escape(name)}'?",
            "",
            theme.render("muted", CONFIRM_HINT),
        ]
    )


def render_confirm_delete(state: HabitsTabState, theme: Theme) -> str:
    return theme.render("title", "Delete Habit") + "\n\n" + render_confirm_delete_content(state, theme)


def render_error(error: Exception, theme: Theme) -> str:
    return theme.render("muted", f"Error: {error}")


# Form


def _render_text_value(value: str, focused: bool, theme: Theme) -> str:
    if focused:
        return f"{theme.render('selected', value)}[blink]_[/blink]"
    return theme.render("normal", value) if value else theme.render("muted", "-")


def _render_field_value(form: FormState, field: Field, theme: Theme) -> str:
    focused = form.focus == field
    if field == Field.NAME:
        return _render_text_value(form.name, focused, theme)
    if field == Field.DESCRIPTION:
        return _render_text_value(form.description, focused, theme)
    if field == Field.FREQUENCY_VALUE:
        return _render_text_value(form.frequency_value, focused, theme)
    if field == Field.FREQUENCY_TYPE:
        label = form.frequency_type.label
        return theme.render("selected", f"‹ {label} ›") if focused else label

    if field == Field.CATEGORY:
        cat = form.category
        display = f"{cat.name} {cat.emoji}".strip() if cat else NONE_LABEL
    else:
        display = form.emoji or NONE_LABEL

    if focused:
        return theme.render("selected", f"[{display}]")
    if display == NONE_LABEL:
        return theme.render("muted", display)
    return escape(display)


def render_form_content(form: FormState, theme: Theme) -> str:
    lines: list[str] = []
    for field in applicable_fields(form):
        marker = "> " if form.focus == field else "  "
        label = theme.render("label", f"{field.label}:".ljust(13))
        lines.append(f"{marker}{label}{_render_field_value(form, field, theme)}")

    if form.error:
        lines.append("")
        lines.append(theme.render("error", form.error))

    lines.append("")
    hint = PICKER_FIELD_HINT if form.focus in (Field.CATEGORY, Field.EMOJI) else ""
    if hint:
        lines.append(theme.render("muted", hint))
    lines.append(theme.render("muted", FORM_HINT))
    return "\n".join(lines)


def render_form(form: FormState, theme: Theme) -> str:
    title = "New Habit" if form.is_new else "Edit Habit"
    return theme.render("title", title) + "\n\n" + render_form_content(form, theme)


# Pickers


def _render_none_option(state: PickerState) -> str:
    if state.selection is None:
        return escape(f"[{NONE_LABEL}]")
    return f" {NONE_LABEL} "


def _render_grid(picker: Picker, state: PickerState, label, theme: Theme, empty: str) -> list[str]:
    filtered = picker.filtered(state)
    if not filtered:
        return [theme.render("muted", empty)]

    lines: list[str] = []
    start, end = visible_row_range(len(filtered), state.scroll, picker.columns, picker.visible_rows)
    above, below = format_scroll_indicator(start > 0, end * picker.columns < len(filtered))
    if above:
        lines.append(theme.render("muted", above))

    for row in range(start, end):
        cells: list[str] = []
        for col in range(picker.columns):
            idx = row * picker.columns + col
            if idx >= len(filtered):
                break
            text = label(filtered[idx])
            cells.append(escape(f"[{text}]") if idx == state.selection else f" {escape(text)} ")
        lines.append("".join(cells))

    if below:
        lines.append(theme.render("muted", below))
    return lines


def render_emoji_modal(form: FormState, theme: Theme) -> str:
    state = form.emoji_picker or PickerState()
    picker = emoji_picker()
    lines = [
        theme.render("title", "Pick an Emoji"),
        "",
        f"Search: {escape(state.search)}[blink]_[/blink]",
        "",
        _render_none_option(state),
        "",
    ]
    lines.extend(_render_grid(picker, state, lambda e: e, theme, "No emojis found"))
    lines.append("")
    lines.append(theme.render("muted", EMOJI_MODAL_HINT))
    return "\n".join(lines)


def render_category_modal(form: FormState, theme: Theme) -> str:
    state = form.category_picker or PickerState()
    picker = category_picker(form.categories)
    lines = [
        theme.render("title", "Pick a Category"),
        "",
        f"Search: {escape(state.search)}[blink]_[/blink]",
        "",
        _render_none_option(state),
        "",
    ]
    lines.extend(
        _render_grid(
            picker,
            state,
            lambda c: f"{c.emoji or FOLDER_EMOJI} {c.name}",
            theme,
            "No categories found",
        )
    )
    lines.append("")
    lines.append(theme.render("muted", CATEGORY_MODAL_HINT))
    return "\n".join(lines)


# Host-facing entry points


def render_view(state: HabitsTabState, theme: Theme) -> str:
    """Mode-dependent view including a title."""
    if state.error is not None:
        return render_error(state.error, theme)
    if state.mode == Mode.FORM and state.form is not None:
        return render_form(state.form, theme)
    if state.mode == Mode.CONFIRM_DELETE:
        return render_confirm_delete(state, theme)
    return render_list(state, theme)


def render_content(state: HabitsTabState, theme: Theme) -> str:
    """Mode-dependent body for embedding in an externally titled panel."""
    if state.error is not None:
        return render_error(state.error, theme)
    if state.mode == Mode.FORM and state.form is not None:
        return render_form_content(state.form, theme)
    if state.mode == Mode.CONFIRM_DELETE:
        return render_confirm_delete_content(state, theme)
    return render_list_content(state, theme)


def has_modal(state: HabitsTabState) -> bool:
    return state.mode == Mode.FORM and state.form is not None and state.form.has_modal


def render_modal(state: HabitsTabState, theme: Theme) -> str:
    """Content of the open picker, or "" when none is open."""
    if not has_modal(state):
        return ""
    if state.form.emoji_picker is not None:
        return render_emoji_modal(state.form, theme)
    return render_category_modal(state.form, theme)
