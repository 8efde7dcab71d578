"""Installed-package probing.

Answers "is something called NAME already on this host?" so that the
chooser can show a hint and preselect entries. The answer never changes
what the linker does.
"""

import logging
import subprocess

from dotpick.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

# Package manager queries, tried in order. Each entry is the executable
# that must be on PATH and the argument list prefix; the package name is
# appended.
PACKAGE_QUERIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("dpkg", ("dpkg", "-s")),
    ("pacman", ("pacman", "-Q")),
    ("rpm", ("rpm", "-q")),
    ("equery", ("equery", "list")),
)

PROBE_TIMEOUT = 10.0


def _query_package_manager(args: list[str]) -> bool:
    """Run a single package manager query, treating any failure as absent."""
    try:
        return run_command(args, timeout=PROBE_TIMEOUT).success
    except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
        logger.debug("Probe %s failed: %s", args[0], e)
        return False


def is_installed(name: str) -> bool:
    """Check whether a command or package called ``name`` is installed.

    Args:
        name: Candidate name (e.g., "nvim", "tmux").

    Returns:
        True if ``name`` is on PATH or any available package manager
        reports it as installed, False otherwise.
    """
    if not name:
        return False

    if command_exists(name):
        return True

    for executable, prefix in PACKAGE_QUERIES:
        if not command_exists(executable):
            continue
        if _query_package_manager([*prefix, name]):
            logger.debug("%s reports %s installed", executable, name)
            return True

    return False


def probe_installed(names: list[str]) -> dict[str, bool]:
    """Probe every name and return the installed hints.

    Args:
        names: Candidate names.

    Returns:
        Mapping of name to installed flag.
    """
    return {name: is_installed(name) for name in names}
