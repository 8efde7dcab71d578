"""Candidate selection.

A selector receives the candidate names and the installed hints and
returns the names to apply. The linker only sees the returned list, so
any selector (interactive, from command-line names, or everything) can
be plugged in.
"""

from collections.abc import Callable, Iterable

import typer

from dotpick.cli.display import create_candidates_table
from dotpick.utils.formatting import console, print_error, print_warning

Selector = Callable[[list[str], dict[str, bool]], list[str]]

PROMPT_HELP = (
    "Toggle entries by number (e.g. [bold]1 3-5[/bold]), "
    "[bold]a[/bold] selects all, [bold]n[/bold] clears, Enter applies."
)


def parse_toggle_input(text: str, count: int) -> set[int]:
    """Parse a toggle command into zero-based candidate indices.

    Accepts numbers and inclusive ranges separated by spaces or commas,
    e.g. ``"1, 3-5"``.

    Args:
        text: User input.
        count: Number of candidates.

    Returns:
        Set of zero-based indices to toggle.

    Raises:
        ValueError: If a token is not a number or range, or is out of bounds.
    """
    indices: set[int] = set()
    for token in text.replace(",", " ").split():
        start_text, sep, end_text = token.partition("-")
        try:
            start = int(start_text)
            end = int(end_text) if sep else start
        except ValueError:
            msg = f"Not a number or range: {token!r}"
            raise ValueError(msg) from None
        if start > end:
            start, end = end, start
        if start < 1 or end > count:
            msg = f"Out of range (1-{count}): {token!r}"
            raise ValueError(msg)
        indices.update(range(start - 1, end))
    return indices


def apply_command(
    command: str,
    names: list[str],
    selected: set[str],
) -> set[str]:
    """Apply one chooser command to the current selection.

    Args:
        command: ``a`` (all), ``n`` (none) or a toggle list.
        names: Candidate names, in display order.
        selected: Current selection.

    Returns:
        The new selection.

    Raises:
        ValueError: If the toggle list is invalid.
    """
    command = command.strip().lower()
    if command == "a":
        return set(names)
    if command == "n":
        return set()

    result = set(selected)
    for index in parse_toggle_input(command, len(names)):
        result ^= {names[index]}
    return result


def select_interactively(names: list[str], installed: dict[str, bool]) -> list[str]:
    """Let the user choose candidates on the terminal.

    Installed candidates start selected. Blocks until the user confirms
    with an empty line.

    Args:
        names: Candidate names, in display order.
        installed: Installed hint per name.

    Returns:
        Chosen names in candidate order.
    """
    selected = {name for name in names if installed.get(name, False)}

    while True:
        console.print(create_candidates_table(names, installed, selected))
        console.print(f"[muted]{PROMPT_HELP}[/muted]")
        command = typer.prompt("Selection", default="", show_default=False)
        if not command.strip():
            break
        try:
            selected = apply_command(command, names, selected)
        except ValueError as e:
            print_error(str(e))

    return [name for name in names if name in selected]


def select_named(requested: Iterable[str]) -> Selector:
    """Build a selector that picks the given names without prompting.

    Unknown names are reported and skipped.

    Args:
        requested: Names given on the command line.

    Returns:
        Selector returning the requested names in candidate order.
    """
    wanted = list(dict.fromkeys(requested))

    def _select(names: list[str], installed: dict[str, bool]) -> list[str]:
        for name in wanted:
            if name not in names:
                print_warning(f"No dotfile named '{name}' in repository, skipping.")
        return [name for name in names if name in wanted]

    return _select


def select_all(names: list[str], installed: dict[str, bool]) -> list[str]:
    """Select every candidate."""
    return list(names)
