"""Rollback of applied dotfiles.

Restores everything the backup store remembers. There is no record of
which links were created, so rollback does not inspect targets: each
stored entry simply overwrites whatever sits at its original path.
"""

import logging

from dotpick.core.paths import path_present
from dotpick.linker.base import Mutator
from dotpick.linker.store import BackupStore
from dotpick.models.result import RestoreResult

logger = logging.getLogger(__name__)


class RollbackEngine(Mutator):
    """Moves every backed-up original back into place.

    Attributes:
        store: Backup store to drain.
        dry_run: If True, report what would be restored without doing it.
    """

    def __init__(self, store: BackupStore, *, dry_run: bool = False) -> None:
        """Initialize the RollbackEngine.

        Args:
            store: Backup store to drain.
            dry_run: If True, report what would be restored without doing it.
        """
        super().__init__(dry_run=dry_run)
        self._store = store

    def rollback(self) -> list[RestoreResult]:
        """Restore every entry currently held in the backup store.

        Returns:
            List of RestoreResult, one per stored entry. Empty if the store
            exists but holds nothing.

        Raises:
            NoBackupsFoundError: If the store directory does not exist or
                cannot be read.
        """
        records = self._store.records()
        logger.debug("Rolling back %d backup(s) from %s", len(records), self._store.backup_dir)

        results: list[RestoreResult] = []
        for record in records:
            if self._should_mutate(f"restore {record.stored_path} -> {record.original_path}"):
                results.append(self._store.restore(record))
            else:
                results.append(
                    RestoreResult(
                        name=record.name,
                        stored_path=record.stored_path,
                        original_path=record.original_path,
                        success=True,
                        dry_run=True,
                        replaced=path_present(record.original_path),
                    )
                )
        return results
