"""XDG-compliant path management for dotpick.

This module provides standardized paths following the XDG Base Directory
Specification, plus the rule that maps a dotfile name to its location in
the user's home directory.

XDG defaults:
- Config: ~/.config/dotpick/
- State: ~/.local/state/dotpick/
"""

import os
from pathlib import Path

from dotpick.errors import DotpickError

# Application identifier for directory naming
APP_NAME = "dotpick"

# Subdirectory of the state directory holding displaced originals
BACKUP_DIRNAME = "backup"


class HomeDirectoryError(DotpickError):
    """Raised when the invoking user's home directory cannot be resolved."""


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/dotpick/ (or XDG_CONFIG_HOME/dotpick/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    State data includes the backup store, which must persist between runs
    so that a later rollback can find it.

    Returns:
        Path to ~/.local/state/dotpick/ (or XDG_STATE_HOME/dotpick/).
    """
    return _get_xdg_dir("XDG_STATE_HOME", ".local/state")


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to ~/.config/dotpick/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_backup_dir() -> Path:
    """Get the default backup store directory.

    Returns:
        Path to ~/.local/state/dotpick/backup/.
    """
    return get_state_dir() / BACKUP_DIRNAME


def get_home_dir() -> Path:
    """Resolve the invoking user's home directory.

    Every target path is computed relative to this directory, so failure
    to resolve it is fatal.

    Returns:
        Absolute path to the home directory.

    Raises:
        HomeDirectoryError: If the home directory is unknown or missing.
    """
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        msg = f"Cannot determine home directory: {e}"
        raise HomeDirectoryError(msg) from e

    if not home.is_dir():
        msg = f"Home directory does not exist: {home}"
        raise HomeDirectoryError(msg)

    return home


def target_path_for(name: str, home: Path) -> Path:
    """Compute where a dotfile named ``name`` lives in ``home``.

    Args:
        name: Candidate name (e.g., "vimrc").
        home: Home directory.

    Returns:
        ``home / ".name"`` (e.g., ~/.vimrc).
    """
    return home / f".{name}"


def name_for_target(target: Path) -> str:
    """Invert :func:`target_path_for` using only the base name.

    Args:
        target: Target path such as ~/.vimrc.

    Returns:
        Base name with a single leading dot stripped (e.g., "vimrc").
    """
    base = target.name
    return base[1:] if base.startswith(".") else base


def ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def path_present(path: Path) -> bool:
    """Check if anything occupies ``path``, including a dangling symlink.

    Args:
        path: Path to check.

    Returns:
        True if a file, directory or symlink exists at ``path``.
    """
    return path.exists() or path.is_symlink()
