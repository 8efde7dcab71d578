"""dotpick configuration and settings.

Configuration is stored in ~/.config/dotpick/config.toml. Every key is
optional; a missing file means all defaults.

Example::

    backup_dir = "~/.dotfiles-backup"
    checkout_dir = "~/.local/share/dotpick/repo"
    clone_depth = 1
    include_files = false
    probe_installed = true
"""

import logging
import tomllib
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from dotpick.core.paths import get_backup_dir, get_config_path
from dotpick.errors import DotpickError

logger = logging.getLogger(__name__)


class DotpickConfig(BaseModel):
    """Settings for fetching candidates and storing backups.

    Attributes:
        backup_dir: Backup store location. If None, uses the XDG state default.
        checkout_dir: Keep the cloned repository here instead of a
            temporary directory that is removed when the run ends.
        clone_depth: History depth for ``git clone`` (0 = full history).
        clone_timeout_seconds: Abort the clone after this many seconds.
            If None, the clone may take as long as it needs.
        include_files: Offer top-level regular files as candidates, not only
            directories.
        probe_installed: Check whether each candidate is installed on the
            host and preselect those that are.
    """

    model_config = ConfigDict(extra="forbid")

    backup_dir: Annotated[
        Path | None,
        Field(description="Backup store directory (None = XDG state default)"),
    ] = None
    checkout_dir: Annotated[
        Path | None,
        Field(description="Persistent checkout directory (None = temporary)"),
    ] = None
    clone_depth: Annotated[
        int,
        Field(ge=0, description="git clone depth (0 = full history)"),
    ] = 1
    clone_timeout_seconds: Annotated[
        int | None,
        Field(ge=1, description="git clone timeout in seconds"),
    ] = None
    include_files: Annotated[
        bool,
        Field(description="Offer top-level files as candidates"),
    ] = False
    probe_installed: Annotated[
        bool,
        Field(description="Probe the host for installed packages"),
    ] = True

    @property
    def effective_backup_dir(self) -> Path:
        """Get the backup store directory with ``~`` expanded.

        Returns:
            Configured backup directory, or the XDG state default.
        """
        if self.backup_dir is not None:
            return self.backup_dir.expanduser()
        return get_backup_dir()

    @property
    def effective_checkout_dir(self) -> Path | None:
        """Get the persistent checkout directory with ``~`` expanded."""
        if self.checkout_dir is not None:
            return self.checkout_dir.expanduser()
        return None


class ConfigError(DotpickError):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> DotpickConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated DotpickConfig object. Defaults if the file doesn't exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or the content doesn't
            match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return DotpickConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return DotpickConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e
