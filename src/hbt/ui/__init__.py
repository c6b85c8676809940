"""UI module."""

from .habits_tab import HabitsTab, HabitsTabState, Mode, is_focused
from .habits_view import has_modal, render_content, render_modal, render_view
from .panel_builder import filter_items, format_scroll_indicator, reconcile_scroll
from .theme import Theme

__all__ = [
    "HabitsTab",
    "HabitsTabState",
    "Mode",
    "Theme",
    "filter_items",
    "format_scroll_indicator",
    "has_modal",
    "is_focused",
    "reconcile_scroll",
    "render_content",
    "render_modal",
    "render_view",
]
