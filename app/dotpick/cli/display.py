"""Shared Rich display functions for candidates and results.

Provides table builders and summary printers for the chooser, the apply
report and the rollback report.
"""

from rich.table import Table

from dotpick.models.result import LinkResult, LinkStatus, RestoreResult
from dotpick.utils.formatting import console, print_success


def create_candidates_table(
    names: list[str],
    installed: dict[str, bool],
    selected: set[str],
) -> Table:
    """Create a numbered table of candidates for interactive selection.

    Args:
        names: Candidate names, in display order.
        installed: Installed hint per name.
        selected: Names currently selected.

    Returns:
        Rich Table with one numbered row per candidate.
    """
    table = Table(
        title="Available Dotfiles",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("#", width=3, justify="right", style="muted")
    table.add_column("", width=3, justify="center")
    table.add_column("Dotfile", no_wrap=True)
    table.add_column("Installed", justify="center")

    for number, name in enumerate(names, start=1):
        mark = "[success]\\[x][/success]" if name in selected else "[muted]\\[ ][/muted]"
        if installed.get(name, False):
            hint = "[installed]✔[/installed]"
        else:
            hint = "[missing]✘[/missing]"
        table.add_row(str(number), mark, f"[candidate.name]{name}[/]", hint)

    return table


def _link_status_text(result: LinkResult) -> str:
    if result.status == LinkStatus.FAILED:
        return "[error]FAIL[/error]"
    if result.status == LinkStatus.UNCHANGED:
        return "[muted]SKIP[/muted]"
    if result.dry_run:
        return "[info]PLAN[/info]"
    return "[success]OK[/success]"


def _link_message(result: LinkResult) -> str:
    if result.status == LinkStatus.FAILED:
        return result.error or "Unknown error"
    if result.status == LinkStatus.UNCHANGED:
        return "already linked"
    verb = "would link" if result.dry_run else "linked"
    if result.backup_path is None:
        return verb
    backup_verb = "would back up" if result.dry_run else "backed up"
    return f"{verb}, {backup_verb} existing to {result.backup_path}"


def create_link_results_table(results: list[LinkResult], dry_run: bool = False) -> Table:
    """Create a Rich table displaying apply results.

    Args:
        results: List of link results to display.
        dry_run: Whether this is a dry-run (changes table title).

    Returns:
        Rich Table configured for results display.
    """
    table = Table(
        title="Planned Links (Dry Run)" if dry_run else "Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=6, justify="center")
    table.add_column("Dotfile", no_wrap=True)
    table.add_column("Target", style="linked")
    table.add_column("Message")

    for result in results:
        table.add_row(
            _link_status_text(result),
            result.name,
            str(result.target),
            f"[muted]{_link_message(result)}[/muted]",
        )

    return table


def create_restore_results_table(results: list[RestoreResult], dry_run: bool = False) -> Table:
    """Create a Rich table displaying rollback results.

    Args:
        results: List of restore results to display.
        dry_run: Whether this is a dry-run (changes table title).

    Returns:
        Rich Table configured for results display.
    """
    table = Table(
        title="Planned Restores (Dry Run)" if dry_run else "Restored",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=6, justify="center")
    table.add_column("Backup", no_wrap=True)
    table.add_column("Restored To", style="restored")
    table.add_column("Message")

    for result in results:
        if result.failed:
            status = "[error]FAIL[/error]"
            message = result.error or "Unknown error"
        else:
            status = "[info]PLAN[/info]" if result.dry_run else "[success]OK[/success]"
            message = "overwrites existing" if result.replaced else ""

        table.add_row(
            status,
            result.name,
            str(result.original_path),
            f"[muted]{message}[/muted]",
        )

    return table


def print_link_summary(results: list[LinkResult]) -> None:
    """Print a summary of apply results.

    Args:
        results: List of link results.
    """
    applied = sum(1 for r in results if r.status == LinkStatus.APPLIED)
    unchanged = sum(1 for r in results if r.status == LinkStatus.UNCHANGED)
    failed = sum(1 for r in results if r.failed)
    backed_up = sum(1 for r in results if r.backup_path is not None and r.success)

    if failed == 0:
        print_success(f"All {applied + unchanged} dotfile(s) in place.")
    else:
        console.print(
            f"\n[success]{applied + unchanged} in place[/success], [error]{failed} failed[/error]"
        )

    if backed_up:
        console.print(f"[backed_up]{backed_up} existing file(s) moved to backup.[/backed_up]")


def print_restore_summary(results: list[RestoreResult]) -> None:
    """Print a summary of rollback results.

    Args:
        results: List of restore results.
    """
    success_count = sum(1 for r in results if r.success)
    fail_count = sum(1 for r in results if r.failed)

    if fail_count == 0:
        print_success(f"Rollback completed: {success_count} file(s) restored.")
    else:
        console.print(
            f"\n[success]{success_count} restored[/success], [error]{fail_count} failed[/error]"
        )
