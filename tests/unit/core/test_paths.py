"""Unit tests for XDG path management and target path mapping.

Tests for the paths module that provides XDG-compliant directory paths
and the name-to-target rule.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from dotpick.core.paths import (
    APP_NAME,
    HomeDirectoryError,
    ensure_dir,
    get_backup_dir,
    get_config_dir,
    get_config_path,
    get_home_dir,
    get_state_dir,
    name_for_target,
    path_present,
    target_path_for,
)


class TestXdgDirs:
    """Tests for XDG directory helpers."""

    def test_default_config_dir(self) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            os.environ.pop("XDG_CONFIG_HOME", None)

            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_config_dir()

        assert result == tmp_path / APP_NAME

    def test_default_state_dir(self) -> None:
        """get_state_dir returns default path when XDG_STATE_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            os.environ.pop("XDG_STATE_HOME", None)

            result = get_state_dir()

        assert result == Path.home() / ".local" / "state" / APP_NAME

    def test_config_path(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_config_path() == tmp_path / APP_NAME / "config.toml"

    def test_backup_dir_under_state_dir(self, tmp_path: Path) -> None:
        """The default backup store lives in the state directory."""
        with patch.dict(os.environ, {"XDG_STATE_HOME": str(tmp_path)}):
            assert get_backup_dir() == tmp_path / APP_NAME / "backup"


class TestGetHomeDir:
    """Tests for get_home_dir function."""

    def test_returns_existing_home(self, home: Path) -> None:
        assert get_home_dir() == home

    def test_missing_home_raises(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", str(tmp_path / "nope"))

        with pytest.raises(HomeDirectoryError, match="does not exist"):
            get_home_dir()

    def test_unresolvable_home_raises(self) -> None:
        with (
            patch.object(Path, "home", side_effect=RuntimeError("no home")),
            pytest.raises(HomeDirectoryError, match="Cannot determine home directory"),
        ):
            get_home_dir()


class TestTargetMapping:
    """Tests for target_path_for and name_for_target."""

    def test_target_is_dotted_name_in_home(self, tmp_path: Path) -> None:
        assert target_path_for("vimrc", tmp_path) == tmp_path / ".vimrc"

    def test_name_for_target_strips_one_dot(self, tmp_path: Path) -> None:
        assert name_for_target(tmp_path / ".vimrc") == "vimrc"
        assert name_for_target(tmp_path / "..hidden") == ".hidden"

    def test_name_for_target_without_dot(self, tmp_path: Path) -> None:
        assert name_for_target(tmp_path / "plain") == "plain"

    @pytest.mark.parametrize("name", ["vim", "tmux.conf", "config-nvim"])
    def test_mapping_round_trips(self, tmp_path: Path, name: str) -> None:
        assert name_for_target(target_path_for(name, tmp_path)) == name


class TestEnsureDir:
    """Tests for ensure_dir function."""

    def test_creates_nested_directory(self, tmp_path: Path) -> None:
        path = tmp_path / "a" / "b"

        result = ensure_dir(path, "test")

        assert result == path
        assert path.is_dir()

    def test_existing_directory_is_ok(self, tmp_path: Path) -> None:
        assert ensure_dir(tmp_path, "test") == tmp_path

    def test_permission_error(self, tmp_path: Path) -> None:
        with (
            patch.object(Path, "mkdir", side_effect=PermissionError("denied")),
            pytest.raises(RuntimeError, match="Permission denied"),
        ):
            ensure_dir(tmp_path / "blocked", "backup")

    def test_file_in_the_way(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("x")

        with pytest.raises(RuntimeError, match="Cannot create backup directory"):
            ensure_dir(blocker / "sub", "backup")


class TestPathPresent:
    """Tests for path_present function."""

    def test_missing(self, tmp_path: Path) -> None:
        assert path_present(tmp_path / "missing") is False

    def test_file(self, tmp_path: Path) -> None:
        path = tmp_path / "file"
        path.write_text("x")
        assert path_present(path) is True

    def test_dangling_symlink(self, tmp_path: Path) -> None:
        link = tmp_path / "link"
        link.symlink_to(tmp_path / "missing")

        assert link.exists() is False
        assert path_present(link) is True
