"""Run summary.

Aggregates execution outcomes into per-category counts and a
per-package table. Read-only: no decisions are made here.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from wingetctl.models.action import ActionType, ExecutionOutcome, OutcomeStatus


@dataclass(frozen=True, slots=True)
class Report:
    """Summary of a reconciliation run.

    Attributes:
        outcomes: Every outcome, in execution order. Counts, failures and
            the exit status are taken from these.
        rows: One outcome per package id for display. When an id is
            configured more than once, the row keeps its first position
            and the last result.
    """

    outcomes: tuple[ExecutionOutcome, ...]
    rows: tuple[ExecutionOutcome, ...]

    def count_action(self, action: ActionType) -> int:
        """Number of entries that were planned with the given action."""
        return sum(1 for o in self.outcomes if o.entry.action == action)

    def count_status(self, status: OutcomeStatus) -> int:
        """Number of entries that ended with the given status."""
        return sum(1 for o in self.outcomes if o.status == status)

    @property
    def failures(self) -> tuple[ExecutionOutcome, ...]:
        """Entries that failed, timed out, or could not be launched."""
        return tuple(o for o in self.outcomes if o.failed)

    @property
    def success(self) -> bool:
        """Check if every entry succeeded or was skipped."""
        return not self.failures

    @property
    def exit_code(self) -> int:
        """Process exit status for the run: 0 on success, 1 otherwise."""
        return 0 if self.success else 1

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": self.success,
            "actions": {a.value: self.count_action(a) for a in ActionType},
            "statuses": {s.value: self.count_status(s) for s in OutcomeStatus},
            "packages": [r.to_dict() for r in self.rows],
        }


def summarize(outcomes: Sequence[ExecutionOutcome]) -> Report:
    """Build a report from execution outcomes.

    Args:
        outcomes: Outcomes in execution order.

    Returns:
        Report over all outcomes.
    """
    by_package: dict[str, ExecutionOutcome] = {}
    for outcome in outcomes:
        by_package[outcome.entry.package] = outcome

    return Report(outcomes=tuple(outcomes), rows=tuple(by_package.values()))
