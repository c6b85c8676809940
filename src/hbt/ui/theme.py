"""Named Rich styles used by the renderers."""

from dataclasses import dataclass, field

from rich.markup import escape

# Palette
PRIMARY = "#06B6D4"
SECONDARY = "#8B5CF6"
SUCCESS = "#10B981"
WARNING = "#F59E0B"
DANGER = "#EF4444"
MUTED = "#6B7280"
BACKGROUND = "#1F2937"
FOREGROUND = "#F9FAFB"
BORDER = "#374151"

DEFAULT_STYLES: dict[str, str] = {
    "title": f"bold {FOREGROUND}",
    "muted": MUTED,
    "selected": f"bold {PRIMARY}",
    "normal": FOREGROUND,
    "label": MUTED,
    "error": DANGER,
    "primary": PRIMARY,
}


@dataclass(frozen=True)
class Theme:
    """Style lookup passed to every render function.

    Text is escaped before it is wrapped in markup, so user input can never
    inject Rich tags.
    """

    styles: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_STYLES))
    border: str = BORDER
    modal_border: str = PRIMARY
    modal_background: str = BACKGROUND

    def render(self, name: str, text: str) -> str:
        style = self.styles.get(name, "")
        if not style or not text:
            return escape(text)
        return f"[{style}]{escape(text)}[/]"

    def colored(self, color: str, text: str, bold: bool = False) -> str:
        """Render text in an arbitrary color such as a category color."""
        style = f"bold {color}" if bold else color
        return f"[{style}]{escape(text)}[/]"


PLAIN_THEME = Theme(styles={})
