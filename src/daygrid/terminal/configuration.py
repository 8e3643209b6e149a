# SPDX-License-Identifier: MIT

import logging
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from daygrid import configuration
from daygrid.repository.configuration import CONFIGURATION_REPO
from daygrid.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@app.command("show, view, v")
def show() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("slot_height", str(config["slot_height"]))
    table.add_row("minutes_per_slot", str(config["minutes_per_slot"]))
    table.add_row("default_calendar", str(config["default_calendar"]))
    table.add_row("next_event_color", str(config["next_event_color"]))
    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row("log_level", config["log_level"])

    console.print(table)

    yaml_library_type = "untested"
    try:
        from yaml import CDumper as Dumper  # noqa: F401
        from yaml import CLoader as Loader  # noqa: F401

        yaml_library_type = "C"
    except ImportError:
        yaml_library_type = "Python"

    console.print()
    console.print(f"YAML Library Type: {yaml_library_type}")


@app.command("set, s")
def set(
    slot_height: Annotated[
        Optional[int],
        typer.Option("--slot-height", help="pixel height of one grid slot"),
    ] = None,
    minutes_per_slot: Annotated[
        Optional[int],
        typer.Option("--minutes-per-slot", help="minutes covered by one grid slot"),
    ] = None,
    next_event_color: Annotated[
        Optional[int],
        typer.Option("--next-event-color", help="palette index for new events"),
    ] = None,
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Enable/disable the header above views",
        ),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory path for storing calendars",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Go back to the platform data directory",
        ),
    ] = False,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL"),
    ] = None,
) -> None:
    """Update configuration settings."""
    if log_level is not None and log_level.upper() not in LOG_LEVELS:
        raise typer.BadParameter(f"Unknown log level '{log_level}'")

    try:
        CONFIGURATION_REPO.update_config(
            slot_height=slot_height,
            minutes_per_slot=minutes_per_slot,
            next_event_color=next_event_color,
            show_header=show_header,
            data_path=data_path,
            log_level=log_level,
            remove_data_path=remove_data_path,
        )
    except ValueError as e:
        raise typer.BadParameter(str(e))

    if log_level is not None:
        logging.getLogger().setLevel(log_level.upper())

    show()
