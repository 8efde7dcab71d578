"""Unit tests for the dotpick command.

Tests for the CLI entry point: apply with the different selectors,
dry-run, rollback and error exits.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from dotpick import __version__
from dotpick.cli.main import app
from dotpick.sources.git import FetchError
from typer.testing import CliRunner

runner = CliRunner()

REPO = "https://example.com/me/dotfiles.git"


@pytest.fixture
def backup_root(home: Path, tmp_path: Path) -> Path:
    """Default backup store location for the isolated home."""
    return tmp_path / "xdg-state" / "dotpick" / "backup"


@pytest.fixture
def fake_fetch(checkout: Path) -> Iterator[MagicMock]:
    """Replace cloning with the prepared checkout fixture."""

    @contextmanager
    def _fetched(locator: str, **kwargs: object) -> Iterator[Path]:
        yield checkout

    with patch("dotpick.cli.main.fetched_repository", side_effect=_fetched) as mock:
        yield mock


@pytest.fixture
def no_probe() -> Iterator[MagicMock]:
    with patch("dotpick.cli.main.probe_installed", return_value={}) as mock:
        yield mock


class TestBasics:
    """Tests for version and argument handling."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"dotpick version {__version__}" in result.output

    def test_missing_repository(self, home: Path) -> None:
        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "Missing repository argument" in result.output
        assert "Usage: dotpick" in result.output

    def test_select_and_all_conflict(self, home: Path) -> None:
        result = runner.invoke(app, [REPO, "--all", "-s", "vim"])

        assert result.exit_code == 1
        assert "cannot be combined" in result.output

    def test_invalid_config(self, home: Path, tmp_path: Path) -> None:
        config = tmp_path / "config.toml"
        config.write_text("clone_depth = -3\n")

        result = runner.invoke(app, [REPO, "--all", "--config", str(config)])

        assert result.exit_code == 1
        assert "Invalid config content" in result.output


class TestApply:
    """Tests for linking selected dotfiles."""

    def test_apply_all(
        self, home: Path, checkout: Path, fake_fetch: MagicMock, no_probe: MagicMock
    ) -> None:
        result = runner.invoke(app, [REPO, "--all"])

        assert result.exit_code == 0, result.output
        for name in ("tmux", "vim", "zsh"):
            assert (home / f".{name}").resolve() == (checkout / name).resolve()
        assert "All 3 dotfile(s) in place." in result.output
        assert fake_fetch.call_args.args[0] == REPO

    def test_passes_config_to_fetch(
        self, home: Path, tmp_path: Path, fake_fetch: MagicMock, no_probe: MagicMock
    ) -> None:
        config = tmp_path / "config.toml"
        config.write_text("clone_depth = 0\nclone_timeout_seconds = 30\n")

        runner.invoke(app, [REPO, "--all", "-c", str(config)])

        kwargs = fake_fetch.call_args.kwargs
        assert kwargs["depth"] == 0
        assert kwargs["timeout"] == 30
        assert kwargs["checkout_dir"] is None

    def test_apply_named_backs_up_existing(
        self,
        home: Path,
        checkout: Path,
        backup_root: Path,
        fake_fetch: MagicMock,
        no_probe: MagicMock,
    ) -> None:
        (home / ".vim").write_text("my old vim")

        result = runner.invoke(app, [REPO, "-s", "vim"])

        assert result.exit_code == 0, result.output
        assert (home / ".vim").is_symlink()
        assert not (home / ".tmux").exists()
        assert (backup_root / "vim").read_text() == "my old vim"
        assert "1 existing file(s) moved to backup." in result.output

    def test_unknown_name_warned(
        self, home: Path, fake_fetch: MagicMock, no_probe: MagicMock
    ) -> None:
        result = runner.invoke(app, [REPO, "-s", "emacs"])

        assert result.exit_code == 0
        assert "No dotfile named 'emacs'" in result.output
        assert "No dotfiles selected." in result.output

    def test_interactive_preselects_installed(
        self, home: Path, checkout: Path, fake_fetch: MagicMock
    ) -> None:
        """Pressing Enter straight away applies what the probe found."""
        with patch(
            "dotpick.cli.main.probe_installed",
            return_value={"tmux": False, "vim": True, "zsh": False},
        ):
            result = runner.invoke(app, [REPO], input="\n")

        assert result.exit_code == 0, result.output
        assert (home / ".vim").is_symlink()
        assert not (home / ".tmux").exists()
        assert not (home / ".zsh").exists()

    def test_interactive_toggle(self, home: Path, fake_fetch: MagicMock, no_probe: MagicMock) -> None:
        result = runner.invoke(app, [REPO], input="1 3\n\n")

        assert result.exit_code == 0, result.output
        assert (home / ".tmux").is_symlink()
        assert (home / ".zsh").is_symlink()
        assert not (home / ".vim").exists()

    def test_nothing_selected(self, home: Path, fake_fetch: MagicMock, no_probe: MagicMock) -> None:
        result = runner.invoke(app, [REPO], input="\n")

        assert result.exit_code == 0
        assert "No dotfiles selected." in result.output
        assert list(home.iterdir()) == []

    def test_probe_disabled_by_config(
        self, home: Path, tmp_path: Path, fake_fetch: MagicMock, no_probe: MagicMock
    ) -> None:
        config = tmp_path / "config.toml"
        config.write_text("probe_installed = false\n")

        result = runner.invoke(app, [REPO, "--all", "-c", str(config)])

        assert result.exit_code == 0
        no_probe.assert_not_called()

    def test_dry_run_changes_nothing(
        self,
        home: Path,
        backup_root: Path,
        fake_fetch: MagicMock,
        no_probe: MagicMock,
    ) -> None:
        (home / ".zsh").write_text("keep me")

        result = runner.invoke(app, [REPO, "--all", "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "[dry-run] No changes made." in result.output
        assert sorted(p.name for p in home.iterdir()) == [".zsh"]
        assert (home / ".zsh").read_text() == "keep me"
        assert not backup_root.exists()

    def test_empty_repository(
        self, home: Path, tmp_path: Path, no_probe: MagicMock
    ) -> None:
        empty = tmp_path / "empty"
        empty.mkdir()

        @contextmanager
        def _fetched(locator: str, **kwargs: object) -> Iterator[Path]:
            yield empty

        with patch("dotpick.cli.main.fetched_repository", side_effect=_fetched):
            result = runner.invoke(app, [REPO, "--all"])

        assert result.exit_code == 0
        assert "No dotfiles found in repository." in result.output

    def test_fetch_error_exits(self, home: Path) -> None:
        with patch(
            "dotpick.cli.main.fetched_repository",
            side_effect=FetchError("Failed to clone: repository not found"),
        ):
            result = runner.invoke(app, [REPO, "--all"])

        assert result.exit_code == 1
        assert "repository not found" in result.output
        assert list(home.iterdir()) == []

    def test_link_failure_exits_nonzero(
        self, home: Path, fake_fetch: MagicMock, no_probe: MagicMock
    ) -> None:
        with patch.object(Path, "symlink_to", side_effect=PermissionError("denied")):
            result = runner.invoke(app, [REPO, "-s", "vim"])

        assert result.exit_code == 1
        assert "1 failed" in result.output


class TestRollback:
    """Tests for --rollback."""

    @pytest.mark.parametrize("extra", [[], ["--dry-run"]])
    def test_no_store(
        self, home: Path, tmp_path: Path, backup_root: Path, extra: list[str]
    ) -> None:
        """Rollback without a store exits 1 and writes nothing."""
        (home / ".vimrc").write_text("current")
        tree_before = sorted(str(p.relative_to(tmp_path)) for p in tmp_path.rglob("*"))

        result = runner.invoke(app, ["--rollback", *extra])

        assert result.exit_code == 1
        assert "No backups found" in result.output
        assert sorted(str(p.relative_to(tmp_path)) for p in tmp_path.rglob("*")) == tree_before
        assert (home / ".vimrc").read_text() == "current"
        assert not backup_root.parent.exists()

    def test_empty_store(self, home: Path, backup_root: Path) -> None:
        backup_root.mkdir(parents=True)

        result = runner.invoke(app, ["--rollback"])

        assert result.exit_code == 0
        assert "nothing to restore" in result.output

    def test_apply_then_rollback(
        self,
        home: Path,
        backup_root: Path,
        fake_fetch: MagicMock,
        no_probe: MagicMock,
    ) -> None:
        (home / ".vim").write_text("original vim")
        runner.invoke(app, [REPO, "-s", "vim"])

        result = runner.invoke(app, ["--rollback"])

        assert result.exit_code == 0, result.output
        assert not (home / ".vim").is_symlink()
        assert (home / ".vim").read_text() == "original vim"
        assert "Rollback completed: 1 file(s) restored." in result.output
        fake_fetch.assert_called_once()

    def test_rollback_dry_run(self, home: Path, backup_root: Path) -> None:
        backup_root.mkdir(parents=True)
        (backup_root / "vimrc").write_text("saved")

        result = runner.invoke(app, ["--rollback", "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "[dry-run] No changes made." in result.output
        assert not (home / ".vimrc").exists()
        assert (backup_root / "vimrc").read_text() == "saved"

    def test_rollback_ignores_repository(self, home: Path, backup_root: Path) -> None:
        backup_root.mkdir(parents=True)

        with patch("dotpick.cli.main.fetched_repository") as mock_fetch:
            result = runner.invoke(app, [REPO, "--rollback"])

        assert result.exit_code == 0
        assert "Ignoring repository" in result.output
        mock_fetch.assert_not_called()

    def test_custom_backup_dir(self, home: Path, tmp_path: Path) -> None:
        store_dir = tmp_path / "custom-backup"
        store_dir.mkdir()
        (store_dir / "inputrc").write_text("set editing-mode vi")
        config = tmp_path / "config.toml"
        config.write_text(f'backup_dir = "{store_dir}"\n')

        result = runner.invoke(app, ["--rollback", "-c", str(config)])

        assert result.exit_code == 0, result.output
        assert (home / ".inputrc").read_text() == "set editing-mode vi"
