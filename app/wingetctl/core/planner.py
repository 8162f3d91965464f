"""Reconciliation planner.

Classifies every configured package against the system snapshot. The
classification is a pure function of the package id and the snapshot:
no other state is consulted and nothing is mutated.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from wingetctl.models.action import ActionType, PlanEntry
from wingetctl.models.package import PackageSpec
from wingetctl.models.snapshot import SystemSnapshot


def classify(spec: PackageSpec, snapshot: SystemSnapshot) -> ActionType:
    """Decide what needs to happen to a single package.

    Args:
        spec: Configured package.
        snapshot: State captured before any mutation.

    Returns:
        INSTALL if the package is not installed, UPGRADE if it is installed
        and listed as upgradable, SKIP otherwise.
    """
    if not snapshot.is_installed(spec.id):
        return ActionType.INSTALL
    if snapshot.is_upgradable(spec.id):
        return ActionType.UPGRADE
    return ActionType.SKIP


@dataclass(frozen=True, slots=True)
class Plan:
    """Ordered list of plan entries, one per configured package.

    Attributes:
        entries: Plan entries in package list order.
    """

    entries: tuple[PlanEntry, ...]

    def __iter__(self) -> Iterator[PlanEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> PlanEntry:
        return self.entries[index]

    def _of_type(self, action: ActionType) -> tuple[PlanEntry, ...]:
        return tuple(e for e in self.entries if e.action == action)

    @property
    def installs(self) -> tuple[PlanEntry, ...]:
        """Entries that will be installed."""
        return self._of_type(ActionType.INSTALL)

    @property
    def upgrades(self) -> tuple[PlanEntry, ...]:
        """Entries that will be upgraded."""
        return self._of_type(ActionType.UPGRADE)

    @property
    def skips(self) -> tuple[PlanEntry, ...]:
        """Entries that are already up to date."""
        return self._of_type(ActionType.SKIP)

    @property
    def pending(self) -> tuple[PlanEntry, ...]:
        """Entries that need a mutating operation."""
        return tuple(e for e in self.entries if e.is_mutating)

    @property
    def is_in_sync(self) -> bool:
        """Check if every configured package is installed and up to date."""
        return not self.pending

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "in_sync": self.is_in_sync,
            "summary": {
                "install": len(self.installs),
                "upgrade": len(self.upgrades),
                "skip": len(self.skips),
                "total": len(self.entries),
            },
            "entries": [
                {
                    "package": e.package,
                    "action": e.action.value,
                    "conflicting_process": e.spec.conflicting_process,
                    "custom_arguments": e.spec.has_override,
                }
                for e in self.entries
            ],
        }


def plan(specs: Iterable[PackageSpec], snapshot: SystemSnapshot) -> Plan:
    """Build the reconciliation plan.

    Args:
        specs: Configured packages in package list order.
        snapshot: State captured before any mutation.

    Returns:
        Plan with one entry per spec, in the same order.
    """
    return Plan(entries=tuple(PlanEntry(spec=s, action=classify(s, snapshot)) for s in specs))
