"""Colour theme for findctl output.

Result tables colour entries by kind (file, folder) and by existence
status after a saved session is re-checked. Defaults live on
ThemeColors; ~/.config/findctl/theme.toml may override any of them
in a ``[colors]`` table.
"""

import logging
import re
import sys
import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from rich.theme import Theme

from findctl.core.paths import get_theme_path

logger = logging.getLogger(__name__)

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")


class ThemeColors(BaseModel):
    """Hex colours (#RGB or #RRGGBB) used by the CLI."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Result rows
    entry_file: str = "#ffffff"
    entry_directory: str = "#0e8ac8"
    entry_missing: str = "#f53263"
    entry_available: str = "#03b971"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, value: object, info: ValidationInfo) -> str:
        """Reject anything that is not a #RGB or #RRGGBB string."""
        field = info.field_name
        if not isinstance(value, str):
            msg = f"{field}: color must be a string"
            raise ValueError(msg)
        color = value.strip()
        if color[:1] != "#":
            msg = f"{field}: color must start with '#'"
            raise ValueError(msg)
        digits = color[1:]
        if len(digits) not in (3, 6):
            msg = f"{field}: color must be #RGB or #RRGGBB format"
            raise ValueError(msg)
        if not _HEX_DIGITS.fullmatch(digits):
            msg = f"{field}: invalid hex color '{color}'"
            raise ValueError(msg)
        return color


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the ``[colors]`` table of a theme file.

    Non-string values are dropped. Returns None when the file is
    absent, unreadable, or has no usable colors table.
    """
    if not path.is_file():
        return None
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    section = data.get("colors", {})
    if not isinstance(section, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", path)
        return None
    return {name: value for name, value in section.items() if isinstance(value, str)}


def load_theme(path: Path | None = None) -> ThemeColors:
    """Build the theme colours, applying the user's overrides if any.

    An invalid override is reported on stderr and the defaults are used.
    """
    theme_path = path or get_theme_path()
    overrides = _load_toml_colors(theme_path)
    if not overrides:
        return ThemeColors()

    try:
        colors = ThemeColors.model_validate(overrides)
    except ValueError as e:
        logger.warning("Invalid theme in %s: %s", theme_path, e)
        print(f"Warning: Invalid theme configuration: {e}", file=sys.stderr)
        return ThemeColors()

    logger.debug("Using theme overrides from %s", theme_path)
    return colors


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Map theme colours onto the Rich style names used by findctl."""
    c = colors if colors is not None else load_theme()
    return Theme(
        {
            "text": c.text,
            "muted": c.muted,
            "dim": c.muted,
            "header": c.header,
            "bold_header": f"bold {c.header}",
            "border": c.border,
            "success": c.success,
            "warning": c.warning,
            "error": f"bold {c.error}",
            "info": c.info,
            "entry.file": c.entry_file,
            "entry.directory": f"bold {c.entry_directory}",
            "entry.missing": f"strike {c.entry_missing}",
            "entry.available": c.entry_available,
        }
    )


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Return the Rich theme, built once per process."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
