"""Result models for link and restore operations.

This module defines the per-name outcome of applying a dotfile and the
per-entry outcome of restoring a backup.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class LinkStatus(str, Enum):
    """Outcome of applying a single dotfile.

    Attributes:
        APPLIED: Target now links to the source (or would, in a dry run).
        UNCHANGED: Target already linked to the source; nothing was done.
        FAILED: The link could not be created.
    """

    APPLIED = "applied"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class LinkResult:
    """Result of applying a single selected dotfile.

    Attributes:
        name: Candidate name.
        source: Path the link points (or would point) to.
        target: Link location in the home directory.
        status: Outcome of the operation.
        error: Error message if the operation failed, None otherwise.
        dry_run: Whether this was a dry run (no filesystem changes).
        backup_path: Where the previous target was moved, None if there was
            nothing to back up. In a dry run, where it would be moved.
    """

    name: str
    source: Path
    target: Path
    status: LinkStatus
    error: str | None = None
    dry_run: bool = False
    backup_path: Path | None = None

    @property
    def success(self) -> bool:
        """Check if the dotfile is (or would be) in place."""
        return self.status != LinkStatus.FAILED

    @property
    def failed(self) -> bool:
        """Check if the operation failed."""
        return self.status == LinkStatus.FAILED


@dataclass(frozen=True, slots=True)
class RestoreResult:
    """Result of restoring one backup entry.

    Attributes:
        name: Backup name (target base name without the leading dot).
        stored_path: Location of the entry inside the backup store.
        original_path: Path the entry is restored to.
        success: Whether the entry was (or would be) restored.
        error: Error message if the restore failed, None otherwise.
        dry_run: Whether this was a dry run (no filesystem changes).
        replaced: Whether something at the original path was overwritten.
    """

    name: str
    stored_path: Path
    original_path: Path
    success: bool
    error: str | None = None
    dry_run: bool = False
    replaced: bool = False

    @property
    def failed(self) -> bool:
        """Check if the restore failed."""
        return not self.success
