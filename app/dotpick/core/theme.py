"""Console colors.

The bundled ``dotpick/data/theme.toml`` provides every color; an optional
``theme.toml`` in the config directory overrides any subset of them.
"""

import logging
import re
import tomllib
from functools import cache
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator
from rich.theme import Theme

from dotpick.core.paths import get_config_dir

logger = logging.getLogger(__name__)

HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")


class ThemeColors(BaseModel):
    """Hex colors for every style dotpick prints with."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"
    linked: str = "#c1ff62"
    backed_up: str = "#f5b332"
    restored: str = "#0e8ac8"
    installed: str = "#03b971"
    missing: str = "#d44ebc"

    @field_validator("*")
    @classmethod
    def _check_hex(cls, value: str, info: ValidationInfo) -> str:
        color = value.strip()
        if not HEX_COLOR.fullmatch(color):
            msg = f"{info.field_name}: expected #RGB or #RRGGBB, got {value!r}"
            raise ValueError(msg)
        return color


def get_user_theme_path() -> Path:
    """Path of the optional user override (~/.config/dotpick/theme.toml)."""
    return get_config_dir() / "theme.toml"


def _read_colors(source: Path | Traversable) -> dict[str, str]:
    """Read the ``[colors]`` table of a theme file; missing or broken files give {}."""
    try:
        with source.open("rb") as f:
            table = tomllib.load(f).get("colors", {})
    except FileNotFoundError:
        return {}
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", source, e)
        return {}

    if not isinstance(table, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", source)
        return {}
    return {key: value for key, value in table.items() if isinstance(value, str)}


def load_colors() -> ThemeColors:
    """Merge the bundled colors with the user's overrides.

    Returns:
        Validated colors. Built-in defaults if the merged result is invalid.
    """
    bundled = resources.files("dotpick.data").joinpath("theme.toml")
    merged = {**_read_colors(bundled), **_read_colors(get_user_theme_path())}
    try:
        return ThemeColors.model_validate(merged)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


@cache
def get_theme() -> Theme:
    """Build the Rich theme once per process."""
    colors = load_colors()
    styles = colors.model_dump()
    styles["error"] = f"bold {colors.error}"
    styles["bold_header"] = f"bold {colors.header}"
    styles["dim"] = colors.muted
    styles["candidate.name"] = f"bold {colors.text}"
    return Theme(styles)
