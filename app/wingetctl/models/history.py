"""Run history models.

This module defines the records appended to the history file after
every executed reconciliation run, including the output tails of
entries that did not succeed.
"""

from __future__ import annotations

import json
import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from wingetctl.models.action import ExecutionOutcome, OutcomeStatus


@dataclass(frozen=True, slots=True)
class FailureRecord:
    """A single failed entry of a run.

    Attributes:
        package: Package identifier.
        action: Action that was attempted ('install' or 'upgrade').
        status: Outcome status value ('failed', 'timeout', 'launch_failed').
        exit_code: Package manager exit code, if the process exited.
        output_tail: Last lines of combined output.
    """

    package: str
    action: str
    status: str
    exit_code: int | None = None
    output_tail: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate record data after initialization."""
        if not self.package:
            msg = "Package name cannot be empty"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        return {
            "package": self.package,
            "action": self.action,
            "status": self.status,
            "exit_code": self.exit_code,
            "output_tail": list(self.output_tail),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FailureRecord:
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
        """
        return cls(
            package=data["package"],
            action=data["action"],
            status=data["status"],
            exit_code=data.get("exit_code"),
            output_tail=tuple(data.get("output_tail", ())),
        )

    @classmethod
    def from_outcome(cls, outcome: ExecutionOutcome) -> FailureRecord:
        """Build a failure record from an execution outcome."""
        return cls(
            package=outcome.entry.package,
            action=outcome.entry.action.value,
            status=outcome.status.value,
            exit_code=outcome.exit_code,
            output_tail=outcome.output_tail,
        )


@dataclass(frozen=True, slots=True)
class RunRecord:
    """Record of one executed reconciliation run.

    Attributes:
        id: Unique identifier (12-character hex string from UUID).
        timestamp: When the run finished (ISO 8601 format with timezone).
        packages_file: Package list the run was based on.
        counts: Number of entries per outcome status value.
        failures: Entries that failed, timed out, or could not launch.
    """

    id: str
    timestamp: str
    packages_file: str
    counts: dict[str, int] = field(default_factory=lambda: {})
    failures: tuple[FailureRecord, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate record data after initialization."""
        if not self.id:
            msg = "Run record ID cannot be empty"
            raise ValueError(msg)
        if not self.timestamp:
            msg = "Timestamp cannot be empty"
            raise ValueError(msg)
        try:
            datetime.fromisoformat(self.timestamp)
        except ValueError:
            msg = f"Timestamp is not ISO 8601: {self.timestamp!r}"
            raise ValueError(msg) from None

    @property
    def success(self) -> bool:
        """Check if every entry of the run succeeded or was skipped."""
        return not self.failures

    @property
    def total(self) -> int:
        """Total number of entries in the run."""
        return sum(self.counts.values())

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "packages_file": self.packages_file,
            "counts": self.counts,
            "failures": [f.to_dict() for f in self.failures],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunRecord:
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If data is invalid.
        """
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            packages_file=data["packages_file"],
            counts=dict(data.get("counts", {})),
            failures=tuple(FailureRecord.from_dict(f) for f in data.get("failures", [])),
        )

    def to_json_line(self) -> str:
        """Serialize to JSON line for JSONL storage (no trailing newline)."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json_line(cls, line: str) -> RunRecord:
        """Deserialize from JSON line.

        Raises:
            json.JSONDecodeError: If line is not valid JSON.
            KeyError: If required fields are missing.
            ValueError: If data is invalid.
        """
        data = json.loads(line.strip())
        return cls.from_dict(data)


def create_run_record(
    outcomes: Sequence[ExecutionOutcome],
    packages_file: str,
) -> RunRecord:
    """Factory function to create a RunRecord from execution outcomes.

    Automatically generates a unique ID and current timestamp.

    Args:
        outcomes: Outcomes of every entry of the run, in execution order.
        packages_file: Path of the package list that was applied.

    Returns:
        New RunRecord.
    """
    counts: dict[str, int] = {status.value: 0 for status in OutcomeStatus}
    for outcome in outcomes:
        counts[outcome.status.value] += 1

    return RunRecord(
        id=uuid.uuid4().hex[:12],
        timestamp=datetime.now(UTC).isoformat(),
        packages_file=packages_file,
        counts=counts,
        failures=tuple(FailureRecord.from_outcome(o) for o in outcomes if o.failed),
    )
