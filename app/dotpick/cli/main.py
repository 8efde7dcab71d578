"""Main CLI application entry point.

Defines the Typer application: fetch a dotfiles repository, choose
entries, link them into the home directory, or roll back.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from dotpick import __version__
from dotpick.cli.display import (
    create_link_results_table,
    create_restore_results_table,
    print_link_summary,
    print_restore_summary,
)
from dotpick.cli.selector import Selector, select_all, select_interactively, select_named
from dotpick.core.config import ConfigError, DotpickConfig, load_config
from dotpick.core.paths import HomeDirectoryError, get_home_dir
from dotpick.core.probe import probe_installed
from dotpick.linker.installer import LinkInstaller
from dotpick.linker.rollback import RollbackEngine
from dotpick.linker.store import BackupStore, NoBackupsFoundError
from dotpick.sources.git import EnumerationError, FetchError, fetched_repository, list_candidates
from dotpick.utils.formatting import console, err_console, print_error, print_info, print_warning

USAGE = "Usage: dotpick <repository> [--rollback] [--dry-run]"

# Create main Typer app
app = typer.Typer(
    name="dotpick",
    help="Pick dotfiles from a repository and link them into your home directory.",
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"dotpick version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Route log records to the error console."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False, show_time=False)],
        force=True,
    )


def _load_settings(config_path: Path | None) -> tuple[DotpickConfig, Path]:
    """Load configuration and resolve the home directory, exiting on failure."""
    try:
        config = load_config(config_path)
        home = get_home_dir()
    except (ConfigError, HomeDirectoryError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    return config, home


@app.command()
def main(
    repository: Annotated[
        str | None,
        typer.Argument(
            help="Git URL or local path of the dotfiles repository.",
            show_default=False,
        ),
    ] = None,
    rollback: Annotated[
        bool,
        typer.Option(
            "--rollback",
            help="Restore every backed-up file and exit.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be done without changing any files.",
        ),
    ] = False,
    select: Annotated[
        list[str] | None,
        typer.Option(
            "--select",
            "-s",
            help="Apply this dotfile without prompting (repeatable).",
        ),
    ] = None,
    select_every: Annotated[
        bool,
        typer.Option(
            "--all",
            "-a",
            help="Apply every dotfile in the repository without prompting.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: ~/.config/dotpick/config.toml).",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Pick dotfiles from a repository and link them into your home directory.

    Existing files are moved to a backup store first and can be put back
    with --rollback.

    Examples:
        dotpick https://github.com/me/dotfiles.git
        dotpick https://github.com/me/dotfiles.git --dry-run
        dotpick ~/src/dotfiles -s nvim -s tmux
        dotpick --rollback
    """
    _configure_logging(verbose)

    if rollback:
        if repository is not None:
            print_warning(f"Ignoring repository '{repository}' during rollback.")
        _run_rollback(config_path, dry_run=dry_run)
        return

    if repository is None:
        print_error("Missing repository argument.")
        err_console.print(USAGE)
        raise typer.Exit(code=1)

    if select and select_every:
        print_error("--select and --all cannot be combined.")
        raise typer.Exit(code=1)

    if select:
        selector: Selector = select_named(select)
    elif select_every:
        selector = select_all
    else:
        selector = select_interactively

    _run_apply(repository, config_path, selector, dry_run=dry_run)


def _run_apply(
    repository: str,
    config_path: Path | None,
    selector: Selector,
    *,
    dry_run: bool,
) -> None:
    """Fetch, choose and link dotfiles.

    Args:
        repository: Git URL or local path.
        config_path: Optional config file override.
        selector: Chooses which candidates to apply.
        dry_run: Report what would be done without doing it.

    Raises:
        typer.Exit: On fatal errors or if any dotfile failed.
    """
    config, home = _load_settings(config_path)

    print_info("Cloning repository...")
    try:
        with fetched_repository(
            repository,
            depth=config.clone_depth,
            timeout=config.clone_timeout_seconds,
            checkout_dir=config.effective_checkout_dir,
        ) as root:
            candidates = list_candidates(root, include_files=config.include_files)
            if not candidates:
                print_warning("No dotfiles found in repository.")
                return

            names = [c.name for c in candidates]
            installed = probe_installed(names) if config.probe_installed else {}

            chosen = selector(names, installed)
            if not chosen:
                print_info("No dotfiles selected.")
                return

            store = BackupStore(config.effective_backup_dir, home)
            installer = LinkInstaller(store, home, dry_run=dry_run)
            print_info("Applying selected dotfiles...")
            results = installer.apply(root, chosen)
    except (FetchError, EnumerationError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    console.print(create_link_results_table(results, dry_run=dry_run))

    if dry_run:
        print_info("\\[dry-run] No changes made.")
    else:
        print_link_summary(results)

    if any(r.failed for r in results):
        raise typer.Exit(code=1)


def _run_rollback(config_path: Path | None, *, dry_run: bool) -> None:
    """Restore every backed-up dotfile.

    Args:
        config_path: Optional config file override.
        dry_run: Report what would be restored without doing it.

    Raises:
        typer.Exit: If there are no backups or any restore failed.
    """
    config, home = _load_settings(config_path)

    store = BackupStore(config.effective_backup_dir, home)
    engine = RollbackEngine(store, dry_run=dry_run)

    try:
        results = engine.rollback()
    except NoBackupsFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not results:
        print_info("Backup store is empty, nothing to restore.")
        return

    console.print(create_restore_results_table(results, dry_run=dry_run))

    if dry_run:
        print_info("\\[dry-run] No changes made.")
    else:
        print_restore_summary(results)

    if any(r.failed for r in results):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
