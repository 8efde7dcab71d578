"""Dry-run gate shared by the components that modify the filesystem.

Each mutating component receives its run mode as an explicit constructor
argument and asks the gate before every move or link it performs.
"""

import logging

logger = logging.getLogger(__name__)


class Mutator:
    """Base class for components that move files or create links.

    Attributes:
        dry_run: If True, announce mutations instead of performing them.

    Example:
        >>> installer = LinkInstaller(store, home, dry_run=True)
        >>> installer.dry_run
        True
    """

    def __init__(self, *, dry_run: bool = False) -> None:
        """Initialize the mutator.

        Args:
            dry_run: If True, only simulate mutations without executing them.
        """
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if the mutator is in dry-run mode."""
        return self._dry_run

    def _should_mutate(self, description: str) -> bool:
        """Decide whether a mutating step may run.

        In dry-run mode the step is announced and skipped.

        Args:
            description: What the step would do (e.g., "link ~/.vimrc -> ...").

        Returns:
            True if the caller should perform the step, False otherwise.
        """
        if self._dry_run:
            logger.info("Dry-run: would %s", description)
            return False
        return True
