"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from dotpick.linker.store import BackupStore


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated home directory with XDG locations under tmp_path."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "xdg-state"))
    return home_dir


@pytest.fixture
def checkout(tmp_path: Path) -> Path:
    """Fetched dotfiles tree with three candidate directories."""
    root = tmp_path / "checkout"
    for name, filename, content in (
        ("vim", "vimrc", "set number\n"),
        ("tmux", "tmux.conf", "set -g mouse on\n"),
        ("zsh", "zshrc", "export EDITOR=nvim\n"),
    ):
        entry = root / name
        entry.mkdir(parents=True)
        (entry / filename).write_text(content)
    (root / ".git").mkdir()
    (root / "README.md").write_text("# dotfiles\n")
    return root


@pytest.fixture
def backup_dir(tmp_path: Path) -> Path:
    """Backup store location (not created)."""
    return tmp_path / "backup"


@pytest.fixture
def store(backup_dir: Path, home: Path) -> BackupStore:
    """Backup store rooted in tmp_path."""
    return BackupStore(backup_dir, home)
