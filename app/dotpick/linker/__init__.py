"""Dotfile linking, backup and rollback.

This module provides the backup store, the link installer and the
rollback engine, all of which honour dry-run mode.
"""

from dotpick.linker.base import Mutator
from dotpick.linker.installer import LinkInstaller, is_link_to
from dotpick.linker.rollback import RollbackEngine
from dotpick.linker.store import BackupStore, NoBackupsFoundError

__all__ = [
    "BackupStore",
    "LinkInstaller",
    "Mutator",
    "NoBackupsFoundError",
    "RollbackEngine",
    "is_link_to",
]
