"""Shared Rich display functions for plans and results.

Provides table builders and summary printers used by the apply and
diff commands.
"""

from rich.markup import escape
from rich.table import Table

from wingetctl.core.planner import Plan
from wingetctl.core.report import Report
from wingetctl.models.action import ActionType, ExecutionOutcome, OutcomeStatus, PlanEntry
from wingetctl.utils.formatting import console, print_success

_ACTION_LABELS: dict[ActionType, str] = {
    ActionType.INSTALL: "[install]+install[/install]",
    ActionType.UPGRADE: "[upgrade]^upgrade[/upgrade]",
    ActionType.SKIP: "[skip]=skip[/skip]",
}

_STATUS_LABELS: dict[OutcomeStatus, str] = {
    OutcomeStatus.SUCCESS: "[success]OK[/success]",
    OutcomeStatus.SKIPPED: "[skip]SKIP[/skip]",
    OutcomeStatus.FAILED: "[error]FAIL[/error]",
    OutcomeStatus.TIMEOUT: "[timeout]TIMEOUT[/timeout]",
    OutcomeStatus.LAUNCH_FAILED: "[error]NO LAUNCH[/error]",
}


def create_plan_table(the_plan: Plan, dry_run: bool = False) -> Table:
    """Create a Rich table displaying the reconciliation plan.

    Args:
        the_plan: Plan to display.
        dry_run: Whether this is a dry-run (changes table title).

    Returns:
        Rich Table with Action, Package, Process, and Arguments columns.
    """
    title = "Reconciliation Plan (Dry Run)" if dry_run else "Reconciliation Plan"

    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Action", width=9, justify="center")
    table.add_column("Package", no_wrap=True)
    table.add_column("Process")
    table.add_column("Arguments")

    for entry in the_plan:
        spec = entry.spec
        table.add_row(
            _ACTION_LABELS[entry.action],
            escape(spec.id),
            f"[muted]{escape(spec.conflicting_process or '')}[/muted]",
            f"[muted]{'custom' if spec.has_override else ''}[/muted]",
        )

    return table


def create_results_table(report: Report) -> Table:
    """Create a Rich table displaying one result per package.

    Args:
        report: Report of the run.

    Returns:
        Rich Table with Status, Action, Package, and Message columns.
    """
    table = Table(
        title="Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=9, justify="center")
    table.add_column("Action", width=8)
    table.add_column("Package", no_wrap=True)
    table.add_column("Message")

    for row in report.rows:
        table.add_row(
            _STATUS_LABELS[row.status],
            row.entry.action.value,
            escape(row.entry.package),
            f"[muted]{escape(row.error or '')}[/muted]",
        )

    return table


def print_plan_summary(the_plan: Plan) -> None:
    """Print counts of planned installs, upgrades, and skips."""
    parts: list[str] = []
    if the_plan.installs:
        parts.append(f"[install]{len(the_plan.installs)} to install[/install]")
    if the_plan.upgrades:
        parts.append(f"[upgrade]{len(the_plan.upgrades)} to upgrade[/upgrade]")
    if the_plan.skips:
        parts.append(f"[skip]{len(the_plan.skips)} up to date[/skip]")

    if parts:
        console.print(f"\nSummary: {', '.join(parts)}")


def print_entry_start(entry: PlanEntry) -> None:
    """Print a progress line before an entry is applied."""
    console.print(f"{_ACTION_LABELS[entry.action]} {escape(entry.package)} ...")


def print_entry_result(outcome: ExecutionOutcome) -> None:
    """Print the status of an applied entry. Skips print nothing."""
    if outcome.status == OutcomeStatus.SKIPPED:
        return
    console.print(f"  {_STATUS_LABELS[outcome.status]} {escape(outcome.entry.package)}")


def print_failure_details(report: Report) -> None:
    """Print the retained output of every failed package."""
    for failure in report.failures:
        if not failure.output_tail:
            continue
        package = escape(failure.entry.package)
        console.print(f"\n[error]{package}[/error] [muted]last output:[/muted]")
        for line in failure.output_tail:
            console.print(f"  [muted]{escape(line)}[/muted]", highlight=False)


def print_report_summary(report: Report) -> None:
    """Print counts per outcome status."""
    succeeded = report.count_status(OutcomeStatus.SUCCESS)
    skipped = report.count_status(OutcomeStatus.SKIPPED)

    if report.success:
        print_success(f"All {succeeded} operation(s) succeeded, {skipped} already up to date.")
        return

    failed = report.count_status(OutcomeStatus.FAILED)
    timed_out = report.count_status(OutcomeStatus.TIMEOUT)
    not_launched = report.count_status(OutcomeStatus.LAUNCH_FAILED)
    console.print(
        f"\n[success]{succeeded} succeeded[/success], [skip]{skipped} skipped[/skip], "
        f"[error]{failed} failed[/error], [timeout]{timed_out} timed out[/timeout], "
        f"[error]{not_launched} not launched[/error]"
    )
