"""Plan execution.

Applies plan entries one at a time, strictly in order. Each install or
upgrade is preceded by conflict resolution and bounded by a timeout. A
failing entry never stops the run: its outcome is recorded and the next
entry is processed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from wingetctl.core.conflicts import ConflictResolver
from wingetctl.core.settings import Settings
from wingetctl.managers.base import PackageManager
from wingetctl.managers.winget import WingetManager
from wingetctl.models.action import ActionType, ExecutionOutcome, OutcomeStatus, PlanEntry
from wingetctl.models.package import PackageSpec
from wingetctl.utils.process import ProcessController

logger = logging.getLogger(__name__)


def sanitize_arguments(arguments: str) -> str:
    """Prepare raw override arguments for the installer.

    Single quotes are rewritten to double quotes so quoted paths with
    spaces survive as one installer argument. The escaping of the double
    quotes themselves is left to the subprocess layer.

    Args:
        arguments: Raw arguments from the package list.

    Returns:
        Arguments with single quotes replaced by double quotes.
    """
    return arguments.replace("'", '"')


class ExecutionEngine:
    """Applies plan entries against a package manager.

    Attributes:
        manager: Package manager that performs installs and upgrades.
        resolver: Conflict resolver run before every mutating operation.
        timeout: Seconds before a single operation is killed.
    """

    def __init__(
        self,
        manager: PackageManager,
        resolver: ConflictResolver,
        timeout: float = 600.0,
    ) -> None:
        """Initialize the engine.

        Args:
            manager: Package manager that performs installs and upgrades.
            resolver: Conflict resolver run before every mutating operation.
            timeout: Seconds before a single operation is killed.
        """
        self.manager = manager
        self.resolver = resolver
        self.timeout = timeout

    def installer_args(self, spec: PackageSpec) -> list[str]:
        """Build the silent or override arguments for a package.

        The two modes are mutually exclusive: override arguments replace
        the silent flag entirely.
        """
        if spec.install_arguments is not None:
            return self.manager.override_args(sanitize_arguments(spec.install_arguments))
        return self.manager.silent_args()

    def execute(self, entry: PlanEntry) -> ExecutionOutcome:
        """Apply a single plan entry.

        Skip entries never touch the package manager or the process table.

        Args:
            entry: Plan entry to apply.

        Returns:
            ExecutionOutcome classifying the result.
        """
        if not entry.is_mutating:
            return ExecutionOutcome(entry=entry, status=OutcomeStatus.SKIPPED)

        spec = entry.spec
        self.resolver.resolve(spec)

        args = self.installer_args(spec)
        operation = (
            self.manager.upgrade if entry.action == ActionType.UPGRADE else self.manager.install
        )

        try:
            result = operation(spec.id, args, self.timeout)
        except (FileNotFoundError, OSError) as e:
            logger.error("Could not launch %s for %s: %s", self.manager.name, spec.id, e)
            return ExecutionOutcome(
                entry=entry,
                status=OutcomeStatus.LAUNCH_FAILED,
                error=f"Could not launch {self.manager.name}: {e}",
            )

        if result.timed_out:
            logger.warning("%s %s timed out after %.0fs", entry.action.value, spec.id, self.timeout)
            return ExecutionOutcome(
                entry=entry,
                status=OutcomeStatus.TIMEOUT,
                output_tail=result.output_tail,
                error=f"Timed out after {self.timeout:.0f}s",
            )

        if result.returncode == 0:
            return ExecutionOutcome(entry=entry, status=OutcomeStatus.SUCCESS, exit_code=0)

        logger.warning(
            "%s %s failed with exit code %s", entry.action.value, spec.id, result.returncode
        )
        return ExecutionOutcome(
            entry=entry,
            status=OutcomeStatus.FAILED,
            exit_code=result.returncode,
            output_tail=result.output_tail,
            error=f"Exit code {result.returncode}",
        )

    def execute_plan(
        self,
        entries: Iterable[PlanEntry],
        on_start: Callable[[PlanEntry], None] | None = None,
        on_complete: Callable[[ExecutionOutcome], None] | None = None,
    ) -> list[ExecutionOutcome]:
        """Apply every entry in order, continuing past failures.

        Args:
            entries: Plan entries in execution order.
            on_start: Called before each mutating entry is applied.
            on_complete: Called with each outcome, including skips.

        Returns:
            One ExecutionOutcome per entry, in the same order.
        """
        outcomes: list[ExecutionOutcome] = []

        for entry in entries:
            if on_start is not None and entry.is_mutating:
                on_start(entry)
            outcome = self.execute(entry)
            outcomes.append(outcome)
            if on_complete is not None:
                on_complete(outcome)

        failed = sum(1 for o in outcomes if o.failed)
        logger.info("Executed %d entries, %d failed", len(outcomes), failed)
        return outcomes


def create_manager(settings: Settings) -> PackageManager:
    """Create the package manager configured in settings."""
    return WingetManager(executable=settings.executable, tail_lines=settings.output_tail_lines)


def create_engine(
    settings: Settings,
    manager: PackageManager | None = None,
    timeout: float | None = None,
) -> ExecutionEngine:
    """Create an execution engine from settings.

    Args:
        settings: Runtime settings.
        manager: Package manager to use. Created from settings if None.
        timeout: Per-operation timeout overriding settings.timeout_seconds.

    Returns:
        Configured ExecutionEngine.
    """
    resolver = ConflictResolver(
        ProcessController(),
        grace_period=settings.grace_period_seconds,
        use_heuristic=settings.process_name_heuristic,
    )
    return ExecutionEngine(
        manager=manager or create_manager(settings),
        resolver=resolver,
        timeout=timeout if timeout is not None else settings.timeout_seconds,
    )
