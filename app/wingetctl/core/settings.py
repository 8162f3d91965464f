"""Runtime settings.

This module provides the settings model and I/O functions for the
reconciliation run: package-manager executable, timeouts, grace period
and process-name heuristic.

Settings are stored in ~/.config/wingetctl/settings.toml. A missing file
means every value takes its default.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from wingetctl.core.paths import get_packages_path, get_settings_path


class Settings(BaseModel):
    """Settings for a reconciliation run.

    Attributes:
        executable: Package manager binary name or path.
        timeout_seconds: Bound for each install/upgrade (default: 600s / 10 min).
        snapshot_timeout_seconds: Bound for each bulk list query.
        grace_period_seconds: Wait after terminating a conflicting process.
        process_name_heuristic: Derive a process name from the package id
            when none is configured.
        output_tail_lines: Output lines kept for failed entries.
        packages_file: Package list used when no path is given on the CLI.
    """

    model_config = ConfigDict(extra="forbid")

    executable: Annotated[str, Field(min_length=1, description="Package manager binary")] = (
        "winget"
    )
    timeout_seconds: Annotated[
        int,
        Field(ge=1, le=86400, description="Per-operation timeout in seconds"),
    ] = 600
    snapshot_timeout_seconds: Annotated[
        int,
        Field(ge=1, le=3600, description="Timeout for each bulk query in seconds"),
    ] = 120
    grace_period_seconds: Annotated[
        float,
        Field(ge=0, le=30, description="Wait after terminating a conflicting process"),
    ] = 2.0
    process_name_heuristic: Annotated[
        bool,
        Field(description="Guess a process name from the package id"),
    ] = True
    output_tail_lines: Annotated[
        int,
        Field(ge=1, le=200, description="Output lines kept for failures"),
    ] = 10
    packages_file: Annotated[
        Path | None,
        Field(description="Default package list path"),
    ] = None

    @property
    def effective_packages_file(self) -> Path:
        """Get the package list path, falling back to the XDG default."""
        if self.packages_file is not None:
            return self.packages_file.expanduser()
        return get_packages_path()


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated Settings object. Defaults if the file does not exist.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the file cannot be read or its content is invalid.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        return Settings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings in {settings_path}: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The Settings object to save.
        path: Path to save the settings. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()
    settings_path.parent.mkdir(parents=True, exist_ok=True)

    # TOML has no null, unset values are left out
    data = settings.model_dump(mode="json", exclude_none=True)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path
