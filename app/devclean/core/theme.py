"""Colour theme for devclean output.

Colours ship with the package in data/theme.toml and are turned into
Rich styles, one per colour name plus Rich's own progress widget styles.
"""

import logging
import re
import tomllib
from importlib import resources
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")


class ThemeColors(BaseModel):
    """Hex colours used for devclean output (#RGB or #RRGGBB)."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Deletion outcomes
    trashed: str = "#03b971"
    force_deleted: str = "#faf870"
    failed: str = "#f53263"
    already_removed: str = "#b2bec3"

    spinner: str = "#03b971"
    bar_complete: str = "#0ec1c8"
    bar_finished: str = "#03b971"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, v: object, info: Any) -> str:
        if not isinstance(v, str) or not _HEX_COLOR.fullmatch(v.strip()):
            msg = f"{info.field_name}: expected a #RGB or #RRGGBB colour, got {v!r}"
            raise ValueError(msg)
        return v.strip()


def load_theme() -> ThemeColors:
    """Read the bundled theme colours.

    A missing or malformed theme file falls back to the model defaults.
    """
    try:
        text = resources.files("devclean.data").joinpath("theme.toml").read_text("utf-8")
        return ThemeColors(**tomllib.loads(text).get("colors", {}))
    except (OSError, tomllib.TOMLDecodeError, ValidationError) as e:
        logger.error("Bundled theme is unusable, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Convert ThemeColors to a Rich Theme.

    Args:
        colors: Colours to convert. If None, the bundled theme is loaded.

    Returns:
        Rich Theme with a style per colour name.
    """
    if colors is None:
        colors = load_theme()

    styles = colors.model_dump()
    styles.update(
        {
            "error": f"bold {colors.error}",
            "failed": f"bold {colors.failed}",
            "bold_header": f"bold {colors.header}",
            "progress.spinner": colors.spinner,
            "bar.complete": colors.bar_complete,
            "bar.finished": colors.bar_finished,
            "progress.elapsed": colors.muted,
            "progress.remaining": colors.info,
        }
    )
    return Theme(styles)


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Return the Rich theme, building it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
