"""Init command implementation.

Creates the default settings file and a package list template.
"""

from typing import Annotated

import typer

from wingetctl.core.packages import PACKAGE_LIST_TEMPLATE
from wingetctl.core.paths import ensure_config_dir, get_settings_path
from wingetctl.core.settings import Settings, SettingsError, save_settings
from wingetctl.utils.formatting import print_error, print_info, print_success

app = typer.Typer(
    help="Create default settings and a package list template.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def init_config(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite existing files.",
        ),
    ] = False,
) -> None:
    """Create ~/.config/wingetctl/settings.toml and packages.txt.

    Existing files are left untouched unless --force is given.

    Examples:
        wingetctl init
        wingetctl init --force
    """
    if ctx.invoked_subcommand is not None:
        return

    try:
        ensure_config_dir()
    except RuntimeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    settings = Settings()
    settings_path = get_settings_path()
    packages_path = settings.effective_packages_file

    if settings_path.exists() and not force:
        print_info(f"Settings already exist: {settings_path}")
    else:
        try:
            save_settings(settings, settings_path)
        except SettingsError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        print_success(f"Settings written to {settings_path}")

    if packages_path.exists() and not force:
        print_info(f"Package list already exists: {packages_path}")
        return

    try:
        packages_path.write_text(PACKAGE_LIST_TEMPLATE, encoding="utf-8")
    except OSError as e:
        print_error(f"Failed to write package list {packages_path}: {e}")
        raise typer.Exit(code=1) from e
    print_success(f"Package list template written to {packages_path}")
