"""Config and state locations.

Follows the XDG base directory layout on every platform:

- config: ``$XDG_CONFIG_HOME/wingetctl`` (default ``~/.config/wingetctl``)
- state: ``$XDG_STATE_HOME/wingetctl`` (default ``~/.local/state/wingetctl``)
"""

import os
from pathlib import Path

APP_NAME = "wingetctl"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Resolve an application directory from an XDG variable.

    An unset or empty variable falls back to ``~/<default_subdir>``.
    """
    base = os.environ.get(env_var)
    root = Path(base) if base else Path.home() / default_subdir
    return root / APP_NAME


def get_config_dir() -> Path:
    """Directory holding packages.txt, settings.toml and theme.toml."""
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Directory holding the run history."""
    return _get_xdg_dir("XDG_STATE_HOME", ".local/state")


def get_packages_path() -> Path:
    """Default package list."""
    return get_config_dir() / "packages.txt"


def get_settings_path() -> Path:
    """Runtime settings file."""
    return get_config_dir() / "settings.toml"


def _ensure_dir(path: Path, name: str) -> Path:
    """Create a directory with parents.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        reason = "Permission denied" if isinstance(e, PermissionError) else str(e)
        raise RuntimeError(f"Cannot create {name} directory {path}: {reason}") from e
    return path


def ensure_config_dir() -> Path:
    """Create the config directory if needed and return it."""
    return _ensure_dir(get_config_dir(), "config")
