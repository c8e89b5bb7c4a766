"""Shared terminal output for create-ent-stack.

User-facing progress goes to ``console`` (stdout); log records and fatal
errors go to ``err_console`` (stderr) through a rich log handler.
"""

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from create_ent_stack.ui.theme import EntTheme, THEME, Symbols

LOG_LEVEL_ENV = "CREATE_ENT_STACK_LOG_LEVEL"

console = Console(theme=THEME, highlight=False, soft_wrap=True)
err_console = Console(theme=THEME, stderr=True, highlight=False, soft_wrap=True)

__all__ = [
    "EntTheme",
    "THEME",
    "Symbols",
    "console",
    "err_console",
    "configure_logging",
]


def configure_logging(level: Optional[str] = None) -> None:
    """Route log records through rich on stderr.

    Args:
        level: Log level name; falls back to ``$CREATE_ENT_STACK_LOG_LEVEL``
            and then ``WARNING``.
    """
    name = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        numeric = logging.WARNING

    logging.basicConfig(
        level=numeric,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=False,
                markup=False,
            )
        ],
    )
