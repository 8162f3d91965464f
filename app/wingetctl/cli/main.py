"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from wingetctl import __version__
from wingetctl.cli.commands import apply, diff, history, init
from wingetctl.utils.formatting import err_console

app = typer.Typer(
    name="wingetctl",
    help="Declarative package reconciliation for winget.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"wingetctl version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route wingetctl log records to stderr through Rich.

    Warnings are shown by default so that skipped lines, degraded queries
    and failed terminations reach the user.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=err_console,
        show_time=False,
        show_path=False,
        markup=False,
    )
    package_logger = logging.getLogger("wingetctl")
    package_logger.handlers = [handler]
    package_logger.setLevel(level)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """wingetctl - Declarative package reconciliation for winget.

    List the packages a machine should have in a plain text file and
    bring the machine in line with a single run.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    configure_logging(verbose=verbose, quiet=quiet)


app.add_typer(apply.app, name="apply")
app.add_typer(diff.app, name="diff")
app.add_typer(init.app, name="init")
app.add_typer(history.app, name="history")


if __name__ == "__main__":
    app()
