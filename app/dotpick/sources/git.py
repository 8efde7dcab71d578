"""Git source provider.

Clones the dotfiles repository and enumerates its top-level entries as
candidates. By default the checkout lives in a temporary directory that
is removed when the run ends, whatever the outcome.
"""

import logging
import shutil
import subprocess
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from dotpick.core.paths import ensure_dir
from dotpick.errors import DotpickError
from dotpick.models.candidate import CandidateEntry
from dotpick.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)


class FetchError(DotpickError):
    """Raised when the candidate repository cannot be obtained."""


class EnumerationError(DotpickError):
    """Raised when the fetched repository cannot be listed."""


def clone_repository(
    locator: str,
    dest: Path,
    *,
    depth: int = 1,
    timeout: float | None = None,
) -> Path:
    """Clone ``locator`` into ``dest``.

    Args:
        locator: Repository URL or local path accepted by ``git clone``.
        dest: Directory to clone into. Must not exist or be empty.
        depth: History depth; 0 clones the full history.
        timeout: Maximum time in seconds for the clone. None waits forever.

    Returns:
        The checkout directory (``dest``).

    Raises:
        FetchError: If git is missing, the clone fails or times out.
    """
    if not command_exists("git"):
        msg = "git executable not found in PATH"
        raise FetchError(msg)

    args = ["git", "clone"]
    if depth > 0:
        args.extend(["--depth", str(depth)])
    args.extend(["--", locator, str(dest)])

    logger.info("Cloning %s into %s", locator, dest)
    try:
        result = run_command(args, timeout=timeout)
    except subprocess.TimeoutExpired as e:
        msg = f"Timed out cloning {locator} after {e.timeout:.0f}s"
        raise FetchError(msg) from e
    except OSError as e:
        msg = f"Failed to run git: {e}"
        raise FetchError(msg) from e

    if not result.success:
        detail = result.stderr.strip() or f"git exited with status {result.returncode}"
        msg = f"Failed to clone {locator}: {detail}"
        raise FetchError(msg)

    return dest


@contextmanager
def fetched_repository(
    locator: str,
    *,
    depth: int = 1,
    timeout: float | None = None,
    checkout_dir: Path | None = None,
) -> Iterator[Path]:
    """Fetch the repository for the duration of a ``with`` block.

    Args:
        locator: Repository URL or local path.
        depth: History depth; 0 clones the full history.
        timeout: Maximum time in seconds for the clone.
        checkout_dir: Keep the checkout here. A previous checkout at this
            location is replaced. If None, a temporary directory is used
            and removed on exit.

    Yields:
        Path to the checkout root.

    Raises:
        FetchError: If the repository cannot be obtained.
    """
    if checkout_dir is not None:
        try:
            if checkout_dir.exists():
                logger.info("Replacing previous checkout at %s", checkout_dir)
                shutil.rmtree(checkout_dir)
            ensure_dir(checkout_dir.parent, "checkout")
        except (OSError, RuntimeError) as e:
            msg = f"Cannot prepare checkout directory {checkout_dir}: {e}"
            raise FetchError(msg) from e
        yield clone_repository(locator, checkout_dir, depth=depth, timeout=timeout)
        return

    workdir = Path(tempfile.mkdtemp(prefix="dotpick-"))
    try:
        yield clone_repository(locator, workdir / "repo", depth=depth, timeout=timeout)
    finally:
        logger.debug("Removing temporary checkout %s", workdir)
        shutil.rmtree(workdir, ignore_errors=True)


def list_candidates(root: Path, *, include_files: bool = False) -> list[CandidateEntry]:
    """Enumerate the top-level entries of a checkout.

    Hidden entries (``.git``, ``.github``, ...) are never candidates.

    Args:
        root: Checkout root.
        include_files: Also offer regular files, not only directories.

    Returns:
        Candidates sorted by name.

    Raises:
        EnumerationError: If ``root`` cannot be listed.
    """
    try:
        entries = sorted(root.iterdir())
    except OSError as e:
        msg = f"Failed to list {root}: {e}"
        raise EnumerationError(msg) from e

    candidates: list[CandidateEntry] = []
    for entry in entries:
        if entry.name.startswith("."):
            continue
        is_dir = entry.is_dir()
        if is_dir or (include_files and entry.is_file()):
            candidates.append(CandidateEntry(name=entry.name, source_path=entry, is_dir=is_dir))

    return candidates
