"""Apply command implementation.

Runs one reconciliation pass: installs missing packages, upgrades
outdated ones and skips the rest.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from wingetctl.cli.common import build_plan, require_packages, require_settings
from wingetctl.cli.display import (
    create_plan_table,
    create_results_table,
    print_entry_result,
    print_entry_start,
    print_failure_details,
    print_plan_summary,
    print_report_summary,
)
from wingetctl.core.executor import create_engine, create_manager
from wingetctl.core.report import Report, summarize
from wingetctl.core.state import StateManager
from wingetctl.models.history import create_run_record
from wingetctl.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Install and upgrade packages to match the package list.",
    invoke_without_command=True,
)


def _confirm_actions(action_count: int) -> bool:
    """Prompt user to confirm action execution."""
    return typer.confirm(
        f"\nProceed with {action_count} operation(s)?",
        default=False,
    )


def _record_run(report: Report, packages_file: Path) -> None:
    """Append the run to history.

    Errors are logged but do not change the command's exit status.
    """
    try:
        StateManager().record_run(create_run_record(report.outcomes, str(packages_file)))
    except OSError as e:
        logger.warning("Failed to record run to history: %s", e)
        print_warning(f"Could not record run to history: {e}")


@app.callback(invoke_without_command=True)
def apply_packages(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Package list to apply (default: ~/.config/wingetctl/packages.txt).",
        ),
    ] = None,
    timeout: Annotated[
        int | None,
        typer.Option(
            "--timeout",
            "-t",
            min=1,
            help="Seconds before a single install or upgrade is killed.",
        ),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation prompt and proceed.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be done without making changes.",
        ),
    ] = False,
) -> None:
    """Apply the package list to the system.

    Queries winget once for installed and once for upgradable packages,
    then for every listed package, in file order:

      - not installed: install
      - installed with an upgrade available: upgrade
      - otherwise: skip

    A running process configured for a package (or guessed from its id)
    is terminated first. A failing package does not stop the run; the
    command exits with 1 if any package failed or timed out.

    Examples:
        wingetctl apply --dry-run        # Preview changes
        wingetctl apply --yes            # Apply without confirmation
        wingetctl apply -c work.txt -t 1800
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = require_settings()
    packages_file = config or settings.effective_packages_file
    specs = require_packages(packages_file)

    if not specs:
        print_info(f"No packages listed in {packages_file}. Nothing to do.")
        return

    manager = create_manager(settings)
    the_plan = build_plan(specs, manager, settings)

    console.print(create_plan_table(the_plan, dry_run))
    print_plan_summary(the_plan)

    if the_plan.is_in_sync:
        print_success("All packages are installed and up to date. Nothing to do.")
        return

    if dry_run:
        print_info("\nDry-run mode: No changes were made.")
        return

    if not yes and not _confirm_actions(len(the_plan.pending)):
        print_info("Aborted.")
        raise typer.Exit(code=0)

    engine = create_engine(settings, manager=manager, timeout=timeout)

    console.print("\n[bold]Executing operations...[/bold]\n")
    try:
        outcomes = engine.execute_plan(
            the_plan,
            on_start=print_entry_start,
            on_complete=print_entry_result,
        )
    except KeyboardInterrupt:
        print_error("Interrupted. The running operation was stopped.")
        raise typer.Exit(code=130) from None

    report = summarize(outcomes)

    console.print()
    console.print(create_results_table(report))
    print_failure_details(report)
    print_report_summary(report)

    _record_run(report, packages_file)

    if report.exit_code != 0:
        raise typer.Exit(code=report.exit_code)
