"""Console colors.

The bundled ``data/theme.toml`` defines every color. A user file at
``<config dir>/theme.toml`` may override any subset of them; an invalid
user file is ignored with a warning.
"""

import logging
import re
import tomllib
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from wingetctl.core.paths import get_config_dir

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")


class ThemeColors(BaseModel):
    """Hex colors (#RGB or #RRGGBB) for every console style."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Plan actions
    install: str = "#c1ff62"
    upgrade: str = "#0e8ac8"
    skip: str = "#636e72"

    timeout: str = "#d44ebc"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, value: object, info: object) -> str:
        """Reject anything that is not a hex color string."""
        name = getattr(info, "field_name", "color")
        if not isinstance(value, str):
            raise ValueError(f"{name}: color must be a string")
        color = value.strip()
        if not color.startswith("#"):
            raise ValueError(f"{name}: color must start with '#'")
        if len(color) not in (4, 7):
            raise ValueError(f"{name}: color must be #RGB or #RRGGBB format")
        if not _HEX_COLOR.fullmatch(color):
            raise ValueError(f"{name}: invalid hex color '{color}'")
        return color


def get_user_theme_path() -> Path:
    """Path of the optional user theme override."""
    return get_config_dir() / "theme.toml"


def get_bundled_theme_path() -> Path:
    """Path of the theme shipped inside the package."""
    return resources.files("wingetctl.data").joinpath("theme.toml")  # type: ignore[return-value]


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the [colors] table of a theme file.

    Non-string values are dropped.

    Returns:
        Color names mapped to values, or None if the file is missing or
        unreadable.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", path)
        return None
    return {key: value for key, value in colors.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Load the bundled colors merged with the user's overrides.

    Returns:
        Validated colors. Defaults if the merged result is invalid.
    """
    colors = _load_toml_colors(Path(str(get_bundled_theme_path())))
    if colors is None:
        logger.error("Bundled theme is missing, using built-in colors")
        colors = {}

    user_path = get_user_theme_path()
    overrides = _load_toml_colors(user_path)
    if overrides:
        logger.debug("Applying %d color override(s) from %s", len(overrides), user_path)
        colors.update(overrides)

    try:
        return ThemeColors.model_validate(colors)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme used by the shared consoles.

    Every color becomes a style of the same name, plus ``bold_header`` and
    ``dim``. Errors are always bold.
    """
    if colors is None:
        colors = load_theme()

    styles = colors.model_dump()
    styles["error"] = f"bold {colors.error}"
    styles["bold_header"] = f"bold {colors.header}"
    styles["dim"] = colors.muted
    return Theme(styles)


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Return the Rich theme, loading it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
