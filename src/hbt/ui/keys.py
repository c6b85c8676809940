"""Key bindings shared by the habits tab, form and pickers."""

from dataclasses import dataclass

import readchar


@dataclass(frozen=True)
class KeyMap:
    """Each binding is the set of raw key strings readchar may return."""

    up: tuple[str, ...] = (readchar.key.UP, "k")
    down: tuple[str, ...] = (readchar.key.DOWN, "j")
    left: tuple[str, ...] = (readchar.key.LEFT,)
    right: tuple[str, ...] = (readchar.key.RIGHT,)
    page_up: tuple[str, ...] = (readchar.key.PAGE_UP,)
    page_down: tuple[str, ...] = (readchar.key.PAGE_DOWN,)
    next_field: tuple[str, ...] = (readchar.key.TAB,)
    prev_field: tuple[str, ...] = (readchar.key.SHIFT_TAB,)
    enter: tuple[str, ...] = ("\r", "\n")
    space: tuple[str, ...] = (" ",)
    submit: tuple[str, ...] = (readchar.key.CTRL_S,)
    back: tuple[str, ...] = (readchar.key.ESC,)
    backspace: tuple[str, ...] = ("\x7f", "\x08", readchar.key.BACKSPACE)
    add: tuple[str, ...] = ("a",)
    edit: tuple[str, ...] = ("e",)
    delete: tuple[str, ...] = ("d",)
    reload: tuple[str, ...] = ("r",)
    confirm: tuple[str, ...] = ("y", "Y")
    cancel: tuple[str, ...] = ("n", "N")
    quit: tuple[str, ...] = ("q",)


DEFAULT_KEYMAP = KeyMap()

# Arrow-only variants for contexts where j/k are typed text
ARROW_UP = (readchar.key.UP,)
ARROW_DOWN = (readchar.key.DOWN,)


def is_printable(key: str) -> bool:
    """True for a single typed character (not an escape sequence)."""
    return len(key) == 1 and key.isprintable()
