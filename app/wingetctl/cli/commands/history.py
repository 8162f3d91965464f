"""History command for viewing past runs.

This module provides the `wingetctl history` command for viewing
recorded reconciliation runs and the output of failed packages.
"""

import json
from datetime import datetime
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from wingetctl.core.state import StateManager
from wingetctl.models.history import RunRecord
from wingetctl.utils.formatting import console, print_info

app = typer.Typer(
    name="history",
    help="View history of reconciliation runs.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def history(
    ctx: typer.Context,
    limit: Annotated[
        int,
        typer.Option(
            "--limit",
            "-n",
            min=1,
            help="Maximum number of runs to show.",
        ),
    ] = 20,
    failures: Annotated[
        bool,
        typer.Option(
            "--failures",
            help="Show the last output lines of failed packages.",
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show recorded reconciliation runs.

    Examples:
        wingetctl history              # Show last 20 runs
        wingetctl history -n 5 --failures
        wingetctl history --json       # JSON output for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    records = StateManager().get_history(limit=limit)

    if not records:
        print_info("No runs recorded yet.")
        return

    if json_output:
        typer.echo(json.dumps([r.to_dict() for r in records], indent=2))
        return

    _print_table(records)
    if failures:
        _print_failures(records)


def _print_table(records: list[RunRecord]) -> None:
    """Print runs as Rich table."""
    table = Table(title="Run History")
    table.add_column("ID", style="dim")
    table.add_column("Timestamp", style="info")
    table.add_column("OK", justify="right", style="success")
    table.add_column("Skipped", justify="right", style="skip")
    table.add_column("Failed", justify="right", style="error")
    table.add_column("Package list", style="muted")

    for record in records:
        table.add_row(
            record.id[:8],
            _format_timestamp(record.timestamp),
            str(record.counts.get("success", 0)),
            str(record.counts.get("skipped", 0)),
            str(len(record.failures)),
            escape(record.packages_file),
        )

    console.print(table)


def _print_failures(records: list[RunRecord]) -> None:
    """Print the failure records of each run."""
    for record in records:
        for failure in record.failures:
            console.print(
                f"\n[muted]{record.id[:8]}[/muted] [error]{escape(failure.package)}[/error] "
                f"{failure.action} {failure.status} (exit code {failure.exit_code})"
            )
            for line in failure.output_tail:
                console.print(f"  [muted]{escape(line)}[/muted]", highlight=False)


def _format_timestamp(iso_timestamp: str) -> str:
    """Format ISO timestamp for display (YYYY-MM-DD HH:MM)."""
    dt = datetime.fromisoformat(iso_timestamp.replace("Z", "+00:00"))
    return dt.strftime("%Y-%m-%d %H:%M")
