"""Command-line interface.

``app`` is the Typer application behind the ``wingetctl`` console script.
"""

from wingetctl.cli.main import app

__all__ = ["app"]
