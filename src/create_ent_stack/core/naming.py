"""Project name validation and the interactive name prompt."""

import re
from typing import Callable, Optional

from rich.console import Console

from create_ent_stack.core.errors import InputStreamError

# Same rules as the "name" field of package.json
PACKAGE_NAME_PATTERN = re.compile(
    r"^(?:@(?:[a-z0-9-*~][a-z0-9-*._~]*)?/)?[a-z0-9-~][a-z0-9-._~]*$"
)

PROMPT_TEXT = "Enter your project name: "


def is_valid_project_name(value: str) -> bool:
    """Check whether ``value`` is an acceptable package.json name."""
    # fullmatch: "$" alone would accept a trailing newline
    return PACKAGE_NAME_PATTERN.fullmatch(value) is not None


def prompt_project_name(
    read_line: Optional[Callable[[str], str]] = None,
    console: Optional[Console] = None,
) -> str:
    """Ask for a project name until a valid one is entered.

    There is no retry limit. Invalid names print the pattern and loop.

    Args:
        read_line: Callable that shows a prompt and returns one line of
            input (defaults to ``console.input``)
        console: Console used for diagnostics

    Returns:
        The accepted project name

    Raises:
        InputStreamError: If the input stream is closed or unreadable
    """
    if console is None:
        from create_ent_stack.ui import console
    if read_line is None:
        def read_line(prompt: str) -> str:
            return console.input(f"[primary]{prompt}[/]")

    while True:
        try:
            value = read_line(PROMPT_TEXT)
        except EOFError as e:
            raise InputStreamError("Input stream closed before a project name was entered") from e
        except OSError as e:
            raise InputStreamError(f"Could not read project name: {e}") from e

        if is_valid_project_name(value):
            return value

        console.print(
            f'Project name must match package.json "name" criteria:\n'
            f"{PACKAGE_NAME_PATTERN.pattern}",
            style="error",
            markup=False,
        )
