"""Action models for reconciliation.

This module defines the classification of each configured package
(install, upgrade, skip) and the outcome of applying it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from wingetctl.models.package import PackageSpec


class ActionType(Enum):
    """Type of reconciliation action.

    Attributes:
        INSTALL: Package is not installed.
        UPGRADE: Package is installed and an upgrade is available.
        SKIP: Package is installed and up to date.
    """

    INSTALL = "install"
    UPGRADE = "upgrade"
    SKIP = "skip"


class OutcomeStatus(Enum):
    """Result classification of an executed plan entry.

    Attributes:
        SUCCESS: Package manager exited with code 0.
        FAILED: Package manager exited with a non-zero code.
        TIMEOUT: Operation exceeded the timeout and was killed.
        LAUNCH_FAILED: Package manager process could not be started.
        SKIPPED: Nothing to do, no process was started.
    """

    SUCCESS = "success"
    FAILED = "failed"
    TIMEOUT = "timeout"
    LAUNCH_FAILED = "launch_failed"
    SKIPPED = "skipped"

    @property
    def is_error(self) -> bool:
        """Check if this status makes the run fail."""
        return self not in (OutcomeStatus.SUCCESS, OutcomeStatus.SKIPPED)


@dataclass(frozen=True, slots=True)
class PlanEntry:
    """Classification of one package spec against the system snapshot.

    Attributes:
        spec: The package spec this entry was derived from.
        action: What needs to happen to the package.
    """

    spec: PackageSpec
    action: ActionType

    @property
    def package(self) -> str:
        """Package identifier of the underlying spec."""
        return self.spec.id

    @property
    def is_mutating(self) -> bool:
        """Check if applying this entry changes installed software."""
        return self.action != ActionType.SKIP


@dataclass(frozen=True, slots=True)
class ExecutionOutcome:
    """Result of applying a single plan entry.

    Attributes:
        entry: The plan entry that was applied.
        status: Outcome classification.
        exit_code: Package manager exit code. None when the process timed
            out, could not be launched, or was never started.
        output_tail: Last lines of combined output, kept for failures only.
        error: Short human-readable description of a failure.
    """

    entry: PlanEntry
    status: OutcomeStatus
    exit_code: int | None = None
    output_tail: tuple[str, ...] = field(default_factory=tuple)
    error: str | None = None

    @property
    def success(self) -> bool:
        """Check if the entry reached a non-error state."""
        return not self.status.is_error

    @property
    def failed(self) -> bool:
        """Check if the entry failed, timed out, or could not launch."""
        return self.status.is_error

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "package": self.entry.package,
            "action": self.entry.action.value,
            "status": self.status.value,
            "exit_code": self.exit_code,
            "output_tail": list(self.output_tail),
            "error": self.error,
        }
