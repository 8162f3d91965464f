"""Conflicting process resolution.

Before a package is installed or upgraded, a running process that holds
its files open is terminated. The process name comes from the package
list; when none is configured, the last dot-separated segment of the
package id is tried (``Vendor.AppName`` -> ``AppName``). That guess is
best-effort only and an explicit name in the package list always wins.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wingetctl.models.package import PackageSpec
    from wingetctl.utils.process import ProcessController

logger = logging.getLogger(__name__)


class ConflictResolution(Enum):
    """Outcome of a conflict check.

    Attributes:
        NO_PROCESS: No process name is configured or derivable.
        NOT_RUNNING: The process was not running.
        TERMINATED: The process was terminated and the grace period waited.
        TERMINATION_FAILED: The process could not be terminated.
    """

    NO_PROCESS = "no_process"
    NOT_RUNNING = "not_running"
    TERMINATED = "terminated"
    TERMINATION_FAILED = "termination_failed"


def derive_process_name(package_id: str) -> str | None:
    """Guess a process name from a package id.

    Args:
        package_id: Catalog identifier such as 'Vendor.AppName'.

    Returns:
        The segment after the last '.', or None if the id has no separator.
    """
    _, sep, name = package_id.rpartition(".")
    if not sep or not name:
        return None
    return name


class ConflictResolver:
    """Terminates processes that would block an install or upgrade.

    Example:
        >>> resolver = ConflictResolver(ProcessController(), grace_period=2.0)
        >>> resolver.resolve(PackageSpec(id="Mozilla.Firefox", conflicting_process="firefox"))
        <ConflictResolution.NOT_RUNNING: 'not_running'>
    """

    def __init__(
        self,
        controller: ProcessController,
        grace_period: float = 2.0,
        use_heuristic: bool = True,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the resolver.

        Args:
            controller: Process lookup and termination backend.
            grace_period: Seconds to wait after a termination so file
                handles are released before the installer runs.
            use_heuristic: Derive a process name from the package id when
                none is configured.
            sleep: Function used to wait out the grace period.
        """
        self.controller = controller
        self.grace_period = grace_period
        self.use_heuristic = use_heuristic
        self._sleep = sleep

    def target_process(self, spec: PackageSpec) -> str | None:
        """Return the process name to check for a package, if any."""
        if spec.conflicting_process:
            return spec.conflicting_process
        if self.use_heuristic:
            return derive_process_name(spec.id)
        return None

    def resolve(self, spec: PackageSpec) -> ConflictResolution:
        """Terminate the package's conflicting process if it is running.

        Never raises: a failed termination is logged and the caller
        proceeds with the install or upgrade regardless.

        Args:
            spec: Package about to be installed or upgraded.

        Returns:
            ConflictResolution describing what happened.
        """
        name = self.target_process(spec)
        if name is None:
            return ConflictResolution.NO_PROCESS

        if not self.controller.is_running(name):
            logger.debug("Process %s for %s is not running", name, spec.id)
            return ConflictResolution.NOT_RUNNING

        logger.info("Terminating %s before changing %s", name, spec.id)
        if not self.controller.terminate(name):
            logger.warning("Could not terminate %s, continuing with %s anyway", name, spec.id)
            return ConflictResolution.TERMINATION_FAILED

        if self.grace_period > 0:
            self._sleep(self.grace_period)
        return ConflictResolution.TERMINATED
