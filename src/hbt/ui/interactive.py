"""Interactive shell hosting the habits tab."""

import logging
import queue
import sys
import threading
from concurrent.futures import Future, ThreadPoolExecutor

import readchar
from rich.align import Align
from rich.console import Console, Group, RenderableType
from rich.live import Live
from rich.panel import Panel

from hbt.config import Config
from hbt.core import CategoryService, HabitService, create_backend
from hbt.ui.habits_tab import (
    Command,
    HabitsTab,
    HabitsTabState,
    KeyPressed,
    Message,
    Mode,
    WindowResized,
    is_focused,
)
from hbt.ui.habits_view import has_modal, render_content, render_modal
from hbt.ui.theme import Theme

logger = logging.getLogger("hbt.ui")

# UI Constants
DEFAULT_PANEL_WIDTH = 80  # Overridden by config.interactive_width
DEFAULT_TERMINAL_HEIGHT = 24
MODAL_WIDTH = 54
RESIZE_POLL_SECONDS = 0.25

console = Console()


class _Quit:
    """Posted by the key reader when the user hits Ctrl-C."""


def build_display(state: HabitsTabState, theme: Theme, max_width: int) -> RenderableType:
    """Frame the tab body in a titled panel, with the open picker drawn below it."""
    term_width = console.width or max_width
    width = min(max_width, term_width - 4)

    title = "Habits"
    if state.mode == Mode.FORM and state.form is not None:
        title = "New Habit" if state.form.is_new else "Edit Habit"
    elif state.mode == Mode.CONFIRM_DELETE:
        title = "Delete Habit"

    parts: list[RenderableType] = [
        Panel(
            render_content(state, theme),
            title=f"[bold]{title}[/bold]",
            border_style=theme.border,
            padding=(1, 2),
            width=width + 4,
        )
    ]
    if has_modal(state):
        modal = Panel(
            render_modal(state, theme),
            border_style=theme.modal_border,
            style=f"on {theme.modal_background}",
            padding=(1, 2),
            width=min(MODAL_WIDTH, term_width),
        )
        parts.append(Align.center(modal, width=width + 4))
    return Group(*parts)


def _read_keys(events: "queue.Queue[object]") -> None:
    """Blocking key reader; runs on a daemon thread."""
    while True:
        try:
            key = readchar.readkey()
        except KeyboardInterrupt:
            events.put(_Quit())
            return
        events.put(KeyPressed(key))


def restore_terminal() -> None:
    """Ensure terminal is in clean state on exit."""
    sys.stdout.write("\033[?25h")  # Show cursor
    sys.stdout.flush()


def run_event_loop(tab: HabitsTab, theme: Theme, max_width: int) -> None:
    """Process one event at a time until the user quits.

    Key presses and command completions share a queue; commands run on a
    single worker so storage calls complete in the order they were issued.
    """
    events: queue.Queue[object] = queue.Queue()
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="hbt-storage")

    def dispatch(cmd: Command | None) -> None:
        if cmd is not None:
            executor.submit(cmd).add_done_callback(events.put)

    state = HabitsTabState(width=console.width, height=console.height or DEFAULT_TERMINAL_HEIGHT)
    last_size = (console.width, console.height)
    dispatch(tab.init())

    threading.Thread(target=_read_keys, args=(events,), daemon=True).start()

    console.clear()
    try:
        with Live(
            build_display(state, theme, max_width), console=console, auto_refresh=False
        ) as live:
            live.refresh()
            while True:
                try:
                    event = events.get(timeout=RESIZE_POLL_SECONDS)
                except queue.Empty:
                    event = None

                size = (console.width, console.height)
                if size != last_size:
                    last_size = size
                    state, cmd = tab.update(state, WindowResized(*size))
                    dispatch(cmd)
                    console.clear()
                    live.update(build_display(state, theme, max_width), refresh=True)

                if isinstance(event, _Quit):
                    return
                if isinstance(event, KeyPressed):
                    if (
                        not is_focused(state)
                        and state.mode == Mode.LIST
                        and event.key in tab.keys.quit
                    ):
                        return
                    msg: Message = event
                elif isinstance(event, Future):
                    msg = event.result()
                else:
                    continue

                state, cmd = tab.update(state, msg)
                dispatch(cmd)
                live.update(build_display(state, theme, max_width), refresh=True)
    finally:
        executor.shutdown(wait=True)
        restore_terminal()


def interactive_menu(cfg: Config | None = None) -> None:
    """Open the habits tab against the configured database."""
    cfg = cfg or Config.load()
    backend = create_backend(cfg)
    logger.info("Opening habits at %s", backend.path)
    tab = HabitsTab(HabitService(backend), CategoryService(backend))
    try:
        run_event_loop(tab, Theme(), getattr(cfg, "interactive_width", DEFAULT_PANEL_WIDTH))
    finally:
        backend.close()
