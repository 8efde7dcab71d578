"""Data models for dotpick.

This module exports the core data structures used throughout the application.
"""

from dotpick.models.backup import BackupRecord
from dotpick.models.candidate import CandidateEntry
from dotpick.models.result import LinkResult, LinkStatus, RestoreResult

__all__ = [
    "BackupRecord",
    "CandidateEntry",
    "LinkResult",
    "LinkStatus",
    "RestoreResult",
]
