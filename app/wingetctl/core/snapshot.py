"""System state snapshot.

Captures the installed and upgradable package listings with exactly two
bulk queries, regardless of how many packages are configured. A failed
query degrades to an empty listing instead of aborting the run.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from typing import TYPE_CHECKING

from wingetctl.models.snapshot import SystemSnapshot

if TYPE_CHECKING:
    from wingetctl.managers.base import PackageManager
    from wingetctl.utils.shell import CommandResult

logger = logging.getLogger(__name__)


def _capture(label: str, query: Callable[[float], CommandResult], timeout: float) -> str:
    """Run one bulk query, returning its output or "" on any failure.

    winget exits non-zero when there is nothing to list, so a non-zero exit
    is logged at debug level only.
    """
    try:
        result = query(timeout)
    except subprocess.TimeoutExpired:
        logger.warning("Query for %s packages timed out after %.0fs", label, timeout)
        return ""
    except (FileNotFoundError, OSError) as e:
        logger.warning("Query for %s packages could not be started: %s", label, e)
        return ""

    if not result.success:
        logger.debug(
            "Query for %s packages exited with %d, treating as empty: %s",
            label,
            result.returncode,
            result.stderr.strip(),
        )
        return ""

    return result.stdout + result.stderr


def take_snapshot(manager: PackageManager, timeout: float = 120.0) -> SystemSnapshot:
    """Capture the current package state of the machine.

    The two queries run one after the other.

    Args:
        manager: Package manager to query.
        timeout: Bound in seconds for each query.

    Returns:
        SystemSnapshot with the raw listing texts.
    """
    installed = _capture("installed", manager.list_installed, timeout)
    upgradable = _capture("upgradable", manager.list_upgradable, timeout)

    snapshot = SystemSnapshot(installed_text=installed, upgradable_text=upgradable)
    if snapshot.is_empty:
        logger.warning(
            "%s returned no package listings, all packages will be treated as missing",
            manager.name,
        )
    return snapshot
