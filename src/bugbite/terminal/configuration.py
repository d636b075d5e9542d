# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from bugbite import configuration
from bugbite.repository.configuration import (
    CONFIGURATION_REPO,
)
from bugbite.terminal.custom_typer import AliasedTyperGroup
from bugbite.terminal.validate import validate_log_level

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row(
        "clear_ids_on_view",
        "✓ Enabled" if config["clear_ids_on_view"] else "✗ Disabled",
    )
    table.add_row("undo_window_seconds", str(config["undo_window_seconds"]))
    table.add_row("log_level", config["log_level"])
    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row("log_path", str(configuration.LOG_PATH))

    console.print(table)

    yaml_library_type = "untested"
    try:
        from yaml import CDumper as Dumper  # noqa: F401
        from yaml import CLoader as Loader  # noqa: F401

        yaml_library_type = "C"
    except ImportError:
        from yaml import Loader  # type: ignore[assignment] # noqa: F401

        yaml_library_type = "Python"

    console.print()
    console.print(f"YAML Library Type: {yaml_library_type}")


@app.command("set, s")
def set(
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory path for storing data files",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to the default user data directory",
        ),
    ] = False,
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Enable/disable the header above views",
        ),
    ] = None,
    clear_ids_on_view: Annotated[
        Optional[bool],
        typer.Option(
            "--clear-ids-on-view/--no-clear-ids-on-view",
            help="Enable/disable automatic clearing of ID map before list commands",
        ),
    ] = None,
    undo_window_seconds: Annotated[
        Optional[int],
        typer.Option(
            "--undo-window-seconds",
            min=1,
            help="Seconds an action stays undoable",
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            callback=validate_log_level,
            help="Console log level: DEBUG, INFO, WARNING, ERROR",
        ),
    ] = None,
) -> None:
    """Update configuration settings."""
    CONFIGURATION_REPO.update_config(
        data_path=data_path,
        remove_data_path=remove_data_path,
        show_header=show_header,
        clear_ids_on_view=clear_ids_on_view,
        undo_window_seconds=undo_window_seconds,
        log_level=log_level,
    )
    CONFIGURATION_REPO.flush()
    view()
