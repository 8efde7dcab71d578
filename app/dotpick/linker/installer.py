"""Link installer for selected dotfiles.

Turns each selected candidate into a symbolic link ``~/.name`` pointing
into the checkout. Anything already at the target is moved into the
backup store first, so no existing file is ever lost. A symlink never
replaces an entry the store already holds: links left by an earlier run
(often dangling once a temporary checkout is gone) are simply removed.
One failing name never stops the others.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from dotpick.core.paths import path_present, target_path_for
from dotpick.linker.base import Mutator
from dotpick.linker.store import BackupStore
from dotpick.models.result import LinkResult, LinkStatus

logger = logging.getLogger(__name__)


def is_link_to(target: Path, source: Path) -> bool:
    """Check if ``target`` is a symlink that resolves to ``source``.

    Args:
        target: Candidate link location.
        source: Expected link destination.

    Returns:
        True if ``target`` is already the intended link.
    """
    if not target.is_symlink():
        return False
    try:
        return target.resolve() == source.resolve()
    except (OSError, RuntimeError):
        return False


def _invalid_name_reason(name: str) -> str | None:
    if not name:
        return "Name cannot be empty"
    if "/" in name or name in (".", ".."):
        return f"Name must be a single path segment: {name!r}"
    return None


class LinkInstaller(Mutator):
    """Links selected dotfiles into the home directory.

    Attributes:
        store: Backup store receiving displaced targets.
        home: Home directory the links are created in.
        dry_run: If True, report what would be done without doing it.
    """

    def __init__(self, store: BackupStore, home: Path, *, dry_run: bool = False) -> None:
        """Initialize the LinkInstaller.

        Args:
            store: Backup store receiving displaced targets.
            home: Home directory the links are created in.
            dry_run: If True, report what would be done without doing it.
        """
        super().__init__(dry_run=dry_run)
        self._store = store
        self._home = home

    def apply(self, source_root: Path, names: Iterable[str]) -> list[LinkResult]:
        """Link every selected name, in the order given.

        Args:
            source_root: Checkout containing one entry per candidate.
            names: Selected candidate names.

        Returns:
            List of LinkResult, one per name.
        """
        root = source_root.absolute()
        return [self._apply_single(root, name) for name in names]

    def _apply_single(self, source_root: Path, name: str) -> LinkResult:
        """Link a single dotfile.

        Steps:
        1. Validate the name and that the source exists
        2. Skip if the target is already the intended link
        3. Move an existing target into the backup store, or drop a
           stale link when the store already holds this name
        4. Create the symlink

        Args:
            source_root: Absolute checkout root.
            name: Candidate name.

        Returns:
            LinkResult indicating the outcome.
        """
        reason = _invalid_name_reason(name)
        if reason is not None:
            return LinkResult(
                name=name,
                source=source_root,
                target=self._home,
                status=LinkStatus.FAILED,
                error=reason,
                dry_run=self.dry_run,
            )

        source = source_root / name
        target = target_path_for(name, self._home)

        if not path_present(source):
            return LinkResult(
                name=name,
                source=source,
                target=target,
                status=LinkStatus.FAILED,
                error=f"Source not found: {source}",
                dry_run=self.dry_run,
            )

        if is_link_to(target, source):
            logger.debug("%s already links to %s", target, source)
            return LinkResult(
                name=name,
                source=source,
                target=target,
                status=LinkStatus.UNCHANGED,
                dry_run=self.dry_run,
            )

        backup_path: Path | None = None
        if target.is_symlink() and name in self._store:
            # A link left by an earlier run; the store already holds the original.
            if self._should_mutate(f"remove stale link {target}"):
                try:
                    target.unlink()
                except OSError as e:
                    logger.warning("Failed to remove stale link %s: %s", target, e)
                    return LinkResult(
                        name=name,
                        source=source,
                        target=target,
                        status=LinkStatus.FAILED,
                        error=f"Cannot remove stale link: {e}",
                    )
        elif path_present(target):
            if self._should_mutate(f"back up {target}"):
                try:
                    record = self._store.preserve(target)
                except (OSError, RuntimeError) as e:
                    logger.warning("Backup failed for %s: %s", target, e)
                    return LinkResult(
                        name=name,
                        source=source,
                        target=target,
                        status=LinkStatus.FAILED,
                        error=f"Backup failed: {e}",
                    )
                backup_path = record.stored_path if record is not None else None
            else:
                backup_path = self._store.backup_dir / name

        if not self._should_mutate(f"link {target} -> {source}"):
            return LinkResult(
                name=name,
                source=source,
                target=target,
                status=LinkStatus.APPLIED,
                dry_run=True,
                backup_path=backup_path,
            )

        try:
            target.symlink_to(source)
        except OSError as e:
            logger.warning("Failed to create symlink for %s: %s", name, e)
            return LinkResult(
                name=name,
                source=source,
                target=target,
                status=LinkStatus.FAILED,
                error=str(e),
                backup_path=backup_path,
            )

        logger.info("Applied dotfile for %s", name)
        return LinkResult(
            name=name,
            source=source,
            target=target,
            status=LinkStatus.APPLIED,
            backup_path=backup_path,
        )
