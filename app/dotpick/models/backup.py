"""Backup record model.

A backup record describes one displaced original held by the backup store.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class BackupRecord:
    """A displaced original file held in the backup store.

    Attributes:
        name: Target base name without the leading dot (e.g., "vimrc").
        stored_path: Location of the displaced content inside the store.
        original_path: Absolute path the content was moved away from.
        backed_up_at: ISO 8601 timestamp of the backup, if recorded.
    """

    name: str
    stored_path: Path
    original_path: Path
    backed_up_at: str | None = None

    def __post_init__(self) -> None:
        """Validate record data after initialization."""
        if not self.name:
            msg = "Backup name cannot be empty"
            raise ValueError(msg)

    def to_index_entry(self) -> dict[str, Any]:
        """Serialize the fields persisted in the store index.

        Returns:
            Dictionary suitable for TOML serialization.
        """
        result: dict[str, Any] = {"original": str(self.original_path)}
        if self.backed_up_at is not None:
            result["backed_up_at"] = self.backed_up_at
        return result
