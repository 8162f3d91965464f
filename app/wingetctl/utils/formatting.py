"""Shared Rich consoles and message helpers.

Plans, tables and results go to stdout; warnings and errors go to stderr
so that ``diff --json`` output stays machine-readable.
"""

import sys

from rich.console import Console

from wingetctl.core.theme import get_theme


def _color_system() -> str | None:
    """Force truecolor on a TTY so hex theme colors render exactly."""
    return "truecolor" if sys.stdout.isatty() else None


console = Console(theme=get_theme(), color_system=_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_color_system())


def print_info(message: str) -> None:
    """Print an informational line to stdout."""
    console.print(f"[info]{message}[/]")


def print_success(message: str) -> None:
    """Print a success line to stdout."""
    console.print(f"[success]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning to stderr."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error to stderr."""
    err_console.print(f"[error]Error:[/] {message}")
