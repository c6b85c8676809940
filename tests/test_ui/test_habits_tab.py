"""Tests for the habits tab state machine."""

import pytest
import readchar

from hbt.core import CategoryService, HabitService
from hbt.models import Habit
from hbt.ui.habits_tab import (
    HabitArchived,
    HabitSaved,
    HabitsLoaded,
    HabitsTab,
    HabitsTabState,
    KeyPressed,
    Mode,
    WindowResized,
    is_focused,
)


@pytest.fixture
def tab(store) -> HabitsTab:
    return HabitsTab(HabitService(store), CategoryService(store))


def run(tab: HabitsTab, state: HabitsTabState, *keys: str) -> HabitsTabState:
    """Feed keys through the tab, running commands inline like the host does."""
    for key in keys:
        state, cmd = tab.update(state, KeyPressed(key))
        while cmd is not None:
            state, cmd = tab.update(state, cmd())
    return state


@pytest.fixture
def loaded(tab) -> HabitsTabState:
    state, cmd = tab.update(HabitsTabState(), tab.init()())
    assert cmd is None
    return state


class TestLoading:
    def test_init_loads_habits_and_categories(self, loaded, store):
        assert len(loaded.habits) == 4
        assert loaded.categories == tuple(store.categories)
        assert loaded.error is None

    def test_load_failure_keeps_snapshot_and_sets_error(self, tab, loaded, store):
        store.fail.add("list_categories")
        state, _ = tab.update(loaded, tab.load())
        assert isinstance(state.error, Exception)
        assert state.habits == loaded.habits

    def test_load_failure_discards_partial_results(self, tab, store):
        store.fail.add("list_categories")
        msg = tab.load()
        assert msg.habits == ()
        assert msg.error is not None

    def test_successful_load_clears_error(self, tab, loaded, store):
        store.fail.add("list_habits")
        state, _ = tab.update(loaded, tab.load())
        store.fail.clear()
        state = run(tab, state, "r")
        assert state.error is None

    def test_load_clamps_cursor(self, tab):
        state = HabitsTabState(cursor=10)
        state, _ = tab.update(state, HabitsLoaded(habits=(Habit(id=1, name="A"),)))
        assert state.cursor == 0

    def test_load_applies_in_any_mode(self, tab, loaded):
        state = run(tab, loaded, "a")
        state, _ = tab.update(state, HabitsLoaded(habits=()))
        assert state.mode == Mode.FORM
        assert state.habits == ()


class TestCursor:
    def test_cursor_moves_over_display_order(self, tab, loaded):
        assert [h.name for h in loaded.display_habits] == ["Run", "Stretch", "Inbox zero", "Read"]
        state = run(tab, loaded, "j", "j")
        assert state.current_habit.name == "Inbox zero"

    def test_cursor_is_bounded(self, tab, loaded):
        state = run(tab, loaded, "k", readchar.key.UP)
        assert state.cursor == 0
        state = run(tab, state, *["j"] * 10)
        assert state.cursor == 3

    def test_empty_list_disables_edit_and_delete(self, tab):
        state = HabitsTabState()
        for key in ("e", "d", "j", "k"):
            after = run(tab, state, key)
            assert after.mode == Mode.LIST
            assert after.cursor == 0


class TestForm:
    def test_add_opens_empty_form_with_categories(self, tab, loaded):
        state = run(tab, loaded, "a")
        assert state.mode == Mode.FORM
        assert state.form.habit is None
        assert state.form.categories == loaded.categories
        assert is_focused(state)

    def test_add_works_on_empty_list(self, tab):
        state = run(tab, HabitsTabState(), "a")
        assert state.mode == Mode.FORM

    def test_edit_seeds_from_cursored_display_habit(self, tab, loaded):
        state = run(tab, loaded, "j", "e")
        assert state.form.habit.name == "Stretch"
        assert state.form.name == "Stretch"

    def test_submit_with_empty_name_stays_in_form(self, tab, loaded, store):
        store.calls.clear()
        state = run(tab, loaded, "a", "\r")
        assert state.mode == Mode.FORM
        assert state.form.error
        assert "create_habit" not in store.calls
        assert "update_habit" not in store.calls

    def test_submit_creates_and_reloads(self, tab, loaded, store):
        state = run(tab, loaded, "a", *"Floss", "\r")
        assert state.mode == Mode.LIST
        assert state.form is None
        assert "create_habit" in store.calls
        names = [h.name for h in state.habits]
        assert "Floss" in names
        floss = next(h for h in state.habits if h.name == "Floss")
        assert floss.id != 0

    def test_submit_updates_existing(self, tab, loaded, store):
        state = run(tab, loaded, "e", "s", readchar.key.CTRL_S)
        assert "update_habit" in store.calls
        assert "create_habit" not in store.calls
        assert any(h.name == "Runs" and h.id == 2 for h in state.habits)

    def test_submit_dispatches_single_save(self, tab, loaded):
        state = run(tab, loaded, "a", *"Floss")
        state, cmd = tab.update(state, KeyPressed("\r"))
        assert cmd is not None
        assert state.saving
        # second submit while the save is in flight is ignored
        state, second = tab.update(state, KeyPressed("\r"))
        assert second is None

    def test_cancel_returns_to_list_without_storage(self, tab, loaded, store):
        store.calls.clear()
        state = run(tab, loaded, "a", *"Floss", readchar.key.ESC)
        assert state.mode == Mode.LIST
        assert state.form is None
        assert store.calls == []

    def test_save_failure_stores_error_and_closes_form(self, tab, loaded, store):
        store.fail.add("create_habit")
        state = run(tab, loaded, "a", *"Floss", "\r")
        assert state.mode == Mode.LIST
        assert state.form is None
        assert isinstance(state.error, Exception)

    def test_letters_in_form_do_not_move_cursor(self, tab, loaded):
        state = run(tab, loaded, "a", "j", "d", "q")
        assert state.cursor == 0
        assert state.form.name == "jdq"


class TestDelete:
    def test_delete_requires_confirmation(self, tab, loaded, store):
        store.calls.clear()
        state = run(tab, loaded, "d")
        assert state.mode == Mode.CONFIRM_DELETE
        assert store.calls == []

    @pytest.mark.parametrize("key", ["n", readchar.key.ESC])
    def test_cancel_delete(self, tab, loaded, key):
        state = run(tab, loaded, "d", key)
        assert state.mode == Mode.LIST
        assert len(state.habits) == 4

    def test_confirm_dispatches_single_archive(self, tab, loaded, store):
        state = run(tab, loaded, "d")
        state, cmd = tab.update(state, KeyPressed("y"))
        assert cmd is not None
        assert state.saving
        # second confirm while the archive is in flight is ignored
        state, second = tab.update(state, KeyPressed("y"))
        assert second is None

        state, reload = tab.update(state, cmd())
        state, _ = tab.update(state, reload())
        assert not state.saving
        assert state.error is None
        assert store.calls.count("archive_habit") == 1
        assert len(state.habits) == 3

    def test_confirm_archives_cursored_display_habit(self, tab, loaded, store):
        state = run(tab, loaded, "j", "d", "y")
        assert state.mode == Mode.LIST
        assert [h.name for h in state.display_habits] == ["Run", "Inbox zero", "Read"]

    def test_archiving_last_item_moves_cursor_up(self, tab, loaded):
        state = run(tab, loaded, "j", "j", "j", "d", "y")
        assert state.cursor == 2
        assert len(state.habits) == 3

    def test_archiving_only_habit_leaves_cursor_at_zero(self, store):
        store.habits = [Habit(id=1, name="Read")]
        store.categories = []
        tab = HabitsTab(HabitService(store), CategoryService(store))
        state, _ = tab.update(HabitsTabState(), tab.load())

        state = run(tab, state, "d", "y")
        assert state.cursor == 0
        assert state.habits == ()
        assert state.mode == Mode.LIST

    def test_archive_failure_stores_error(self, tab, loaded, store):
        store.fail.add("archive_habit")
        state = run(tab, loaded, "d", "y")
        assert state.mode == Mode.LIST
        assert isinstance(state.error, Exception)
        assert len(state.habits) == 4


class TestMessages:
    def test_resize_updates_tab_and_form(self, tab, loaded):
        state = run(tab, loaded, "a")
        state, _ = tab.update(state, WindowResized(100, 40))
        assert (state.width, state.height) == (100, 40)
        assert (state.form.width, state.form.height) == (100, 40)

    def test_saved_message_with_error(self, tab, loaded):
        state, cmd = tab.update(loaded, HabitSaved(error=KeyError("Habit not found: 9")))
        assert cmd is None
        assert state.error is not None

    def test_archived_message_triggers_reload(self, tab, loaded):
        _, cmd = tab.update(loaded, HabitArchived(id=1))
        assert cmd is not None
        assert isinstance(cmd(), HabitsLoaded)
