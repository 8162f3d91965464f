"""Shared loading steps for CLI commands.

The `apply` and `diff` commands both read settings and the package list,
capture a snapshot and build a plan. Fatal problems are reported and
turned into exit code 1 here.
"""

from pathlib import Path

import typer

from wingetctl.core.packages import (
    PackageListError,
    PackageListNotFoundError,
    load_packages,
)
from wingetctl.core.planner import Plan, plan
from wingetctl.core.settings import Settings, SettingsError, load_settings
from wingetctl.core.snapshot import take_snapshot
from wingetctl.managers.base import PackageManager
from wingetctl.models.package import PackageSpec
from wingetctl.utils.formatting import console, print_error, print_info, print_warning


def require_settings() -> Settings:
    """Load settings or exit with code 1."""
    try:
        return load_settings()
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def require_packages(path: Path) -> list[PackageSpec]:
    """Load the package list or exit with code 1.

    Args:
        path: Package list path.

    Returns:
        Parsed package specs in file order.
    """
    try:
        return load_packages(path)
    except PackageListNotFoundError as e:
        print_error(f"Package list not found: {path}")
        print_info("Run 'wingetctl init' to create one, or pass --config.")
        raise typer.Exit(code=1) from e
    except PackageListError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def build_plan(
    specs: list[PackageSpec],
    manager: PackageManager,
    settings: Settings,
) -> Plan:
    """Capture the system snapshot and classify every package.

    A missing package manager is reported but does not abort: the queries
    degrade to empty listings and every launch fails per entry.
    """
    if not manager.is_available():
        print_warning(f"{manager.name} was not found on PATH.")

    with console.status(f"Querying {manager.name} for installed and upgradable packages..."):
        snapshot = take_snapshot(manager, timeout=settings.snapshot_timeout_seconds)

    return plan(specs, snapshot)
