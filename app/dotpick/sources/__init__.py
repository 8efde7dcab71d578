"""Candidate sources.

This module provides fetching and enumeration of dotfiles repositories.
"""

from dotpick.sources.git import (
    EnumerationError,
    FetchError,
    clone_repository,
    fetched_repository,
    list_candidates,
)

__all__ = [
    "EnumerationError",
    "FetchError",
    "clone_repository",
    "fetched_repository",
    "list_candidates",
]
