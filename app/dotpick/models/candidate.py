"""Candidate entry model.

A candidate is one top-level entry of a fetched dotfiles repository that
the user may choose to link into their home directory.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class CandidateEntry:
    """A manageable dotfile or group discovered in the fetched tree.

    Attributes:
        name: Top-level entry name, unique within one run (e.g., "nvim").
        source_path: Location of the entry inside the checkout.
        is_dir: Whether the entry is a directory.
    """

    name: str
    source_path: Path
    is_dir: bool = True

    def __post_init__(self) -> None:
        """Validate candidate data after initialization."""
        if not self.name:
            msg = "Candidate name cannot be empty"
            raise ValueError(msg)
        if "/" in self.name or self.name in (".", ".."):
            msg = f"Candidate name must be a single path segment: {self.name!r}"
            raise ValueError(msg)
