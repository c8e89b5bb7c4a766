"""Terminal theme for create-ent-stack.

A soft lavender accent on top of the usual green/amber/red status colors.
"""

from dataclasses import dataclass
from rich.style import Style
from rich.theme import Theme


@dataclass
class EntTheme:
    """create-ent-stack color palette."""

    # Primary colors
    PRIMARY = "#B8B9FF"      # Lavender - prompt and summary accent
    SECONDARY = "#7C7EFF"    # Deeper lavender

    # Status colors
    SUCCESS = "#00C853"      # Green
    WARNING = "#FFB000"      # Amber
    ERROR = "#FF3B30"        # Red


# Rich theme for console styling
THEME = Theme({
    "primary": Style(color=EntTheme.PRIMARY),
    "primary.bold": Style(color=EntTheme.PRIMARY, bold=True),
    "secondary": Style(color=EntTheme.SECONDARY),

    # Status styles
    "success": Style(color=EntTheme.SUCCESS),
    "warning": Style(color=EntTheme.WARNING),
    "error": Style(color=EntTheme.ERROR, bold=True),
})


class Symbols:
    """Terminal symbols for status display."""

    SKIPPED = "⊘"
    FAILED = "✗"
