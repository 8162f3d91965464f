"""Diff command implementation.

Shows what `apply` would do without changing anything.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from wingetctl.cli.common import build_plan, require_packages, require_settings
from wingetctl.cli.display import create_plan_table, print_plan_summary
from wingetctl.core.executor import create_manager
from wingetctl.utils.formatting import console, print_info, print_success

app = typer.Typer(
    help="Show the reconciliation plan without applying it.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def diff_packages(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Package list to compare (default: ~/.config/wingetctl/packages.txt).",
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Compare the package list with installed software.

    Only the two read-only winget queries are run.

    Examples:
        wingetctl diff
        wingetctl diff --json
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = require_settings()
    packages_file = config or settings.effective_packages_file
    specs = require_packages(packages_file)

    if not specs:
        print_info(f"No packages listed in {packages_file}.")
        return

    the_plan = build_plan(specs, create_manager(settings), settings)

    if json_output:
        typer.echo(json.dumps(the_plan.to_dict(), indent=2))
        return

    console.print(create_plan_table(the_plan))
    print_plan_summary(the_plan)

    if the_plan.is_in_sync:
        print_success("All packages are installed and up to date.")
