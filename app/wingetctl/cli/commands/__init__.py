"""Subcommands, one Typer app per module."""

from wingetctl.cli.commands import apply, diff, history, init

__all__ = ["apply", "diff", "history", "init"]
