"""Single-generation backup store for displaced dotfiles.

Existing files are moved (not copied) into the store before a link takes
their place. The store holds at most one entry per name; backing up a
name again replaces the previous entry. Original locations are recorded
in a small TOML index next to the entries so that a restore puts content
back exactly where it came from.
"""

import logging
import os
import shutil
import tomllib
from datetime import UTC, datetime
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any, cast

import tomli_w

from dotpick.core.paths import ensure_dir, name_for_target, path_present, target_path_for
from dotpick.errors import DotpickError
from dotpick.models.backup import BackupRecord
from dotpick.models.result import RestoreResult

logger = logging.getLogger(__name__)

# Index file and its temporary siblings share this prefix and are never
# treated as backup entries.
INDEX_PREFIX = ".dotpick-index"
INDEX_FILENAME = f"{INDEX_PREFIX}.toml"


class NoBackupsFoundError(DotpickError):
    """Raised when the backup store is missing or cannot be read."""


def _remove_path(path: Path) -> None:
    """Remove a file, symlink or directory tree at ``path``."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


class BackupStore:
    """Holds displaced originals keyed by target base name.

    Storage location: ~/.local/state/dotpick/backup/ by default. Each entry
    is named after the target's base name with the leading dot stripped
    (``~/.vimrc`` is stored as ``vimrc``).

    Creating a store does not touch the filesystem; the directory is
    created by the first :meth:`preserve` that has something to keep.

    Attributes:
        backup_dir: Directory holding the stored entries.
        home: Home directory used to derive original paths missing from
            the index.
    """

    def __init__(self, backup_dir: Path, home: Path) -> None:
        """Initialize the BackupStore.

        Args:
            backup_dir: Directory holding the stored entries.
            home: Home directory of the invoking user.
        """
        self._backup_dir = backup_dir
        self._home = home

    @property
    def backup_dir(self) -> Path:
        """Directory holding the stored entries."""
        return self._backup_dir

    @property
    def index_path(self) -> Path:
        """Path to the index recording original locations."""
        return self._backup_dir / INDEX_FILENAME

    def preserve(self, target: Path) -> BackupRecord | None:
        """Move ``target`` into the store if it exists.

        Args:
            target: Path about to be replaced (e.g., ~/.vimrc).

        Returns:
            BackupRecord for the stored entry, or None if there was nothing
            at ``target``.

        Raises:
            RuntimeError: If the store directory cannot be created.
            OSError: If the move fails.
        """
        if not path_present(target):
            return None

        name = name_for_target(target)
        ensure_dir(self._backup_dir, "backup")
        stored = self._backup_dir / name

        if path_present(stored):
            logger.warning("Replacing previous backup of %s at %s", name, stored)
            _remove_path(stored)

        shutil.move(str(target), str(stored))

        record = BackupRecord(
            name=name,
            stored_path=stored,
            original_path=target,
            backed_up_at=datetime.now(UTC).isoformat(timespec="seconds"),
        )
        index = self._read_index()
        index[name] = record.to_index_entry()
        self._write_index(index)

        logger.info("Backed up existing dotfile: %s -> %s", target, stored)
        return record

    def records(self) -> list[BackupRecord]:
        """List every entry currently held in the store, sorted by name.

        Returns:
            List of BackupRecord.

        Raises:
            NoBackupsFoundError: If the store directory does not exist or
                cannot be read.
        """
        if not self._backup_dir.is_dir():
            msg = f"No backups found in {self._backup_dir}"
            raise NoBackupsFoundError(msg)

        try:
            entries = sorted(
                p for p in self._backup_dir.iterdir() if not p.name.startswith(INDEX_PREFIX)
            )
        except OSError as e:
            msg = f"Failed to read backup directory {self._backup_dir}: {e}"
            raise NoBackupsFoundError(msg) from e

        index = self._read_index()
        return [self._record_for(entry, index) for entry in entries]

    def get(self, name: str) -> BackupRecord | None:
        """Get the stored entry for ``name``.

        Args:
            name: Backup name (target base name without the leading dot).

        Returns:
            BackupRecord if the store holds ``name``, None otherwise.
        """
        stored = self._backup_dir / name
        if not name or name.startswith(INDEX_PREFIX) or not path_present(stored):
            return None
        return self._record_for(stored, self._read_index())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def is_empty(self) -> bool:
        """Check if the store holds no entries (or does not exist)."""
        try:
            return not self.records()
        except NoBackupsFoundError:
            return True

    def restore(self, record: BackupRecord) -> RestoreResult:
        """Move one stored entry back to its original path.

        Whatever currently sits at the original path is removed first.
        Filesystem errors are reported in the result and leave the entry
        in the store.

        Args:
            record: Entry to restore.

        Returns:
            RestoreResult describing the outcome.
        """
        original = record.original_path
        replaced = path_present(original)

        try:
            if replaced:
                _remove_path(original)
            original.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(record.stored_path), str(original))
        except OSError as e:
            logger.warning("Failed to restore %s: %s", original, e)
            return RestoreResult(
                name=record.name,
                stored_path=record.stored_path,
                original_path=original,
                success=False,
                error=str(e),
                replaced=replaced,
            )

        index = self._read_index()
        if index.pop(record.name, None) is not None:
            self._write_index(index)

        logger.info("Restored %s", original)
        return RestoreResult(
            name=record.name,
            stored_path=record.stored_path,
            original_path=original,
            success=True,
            replaced=replaced,
        )

    def restore_all(self) -> list[RestoreResult]:
        """Restore every entry held in the store.

        Returns:
            List of RestoreResult, one per stored entry.

        Raises:
            NoBackupsFoundError: If the store directory does not exist or
                cannot be read.
        """
        return [self.restore(record) for record in self.records()]

    def _record_for(self, stored: Path, index: dict[str, dict[str, Any]]) -> BackupRecord:
        """Build the record for a stored entry, preferring the indexed original path."""
        name = stored.name
        entry = index.get(name, {})
        original = entry.get("original")
        return BackupRecord(
            name=name,
            stored_path=stored,
            original_path=Path(original) if original else target_path_for(name, self._home),
            backed_up_at=entry.get("backed_up_at"),
        )

    def _read_index(self) -> dict[str, dict[str, Any]]:
        """Read the index, returning an empty mapping if it is missing or unreadable."""
        try:
            with self.index_path.open("rb") as f:
                data = tomllib.load(f)
        except FileNotFoundError:
            return {}
        except (tomllib.TOMLDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable backup index %s: %s", self.index_path, e)
            return {}

        entries: object = data.get("entries", {})
        if not isinstance(entries, dict):
            logger.warning("Invalid 'entries' section in %s", self.index_path)
            return {}
        return {
            name: value
            for name, value in cast(dict[str, object], entries).items()
            if isinstance(value, dict)
        }

    def _write_index(self, index: dict[str, dict[str, Any]]) -> None:
        """Write the index atomically, or delete it when no entries remain.

        A failed write is logged; stored entries then fall back to the
        derived original path on restore.
        """
        if not index:
            try:
                self.index_path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning("Could not remove backup index %s: %s", self.index_path, e)
            return

        tmp_path: Path | None = None
        try:
            # Write atomically using a temporary file in the same directory
            with NamedTemporaryFile(
                mode="wb",
                dir=self._backup_dir,
                prefix=f"{INDEX_PREFIX}.",
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                tomli_w.dump({"entries": index}, f)
            os.replace(str(tmp_path), str(self.index_path))
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            logger.warning("Could not write backup index %s: %s", self.index_path, e)
