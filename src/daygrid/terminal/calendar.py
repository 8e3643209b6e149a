# SPDX-License-Identifier: MIT

from typing import Annotated, NoReturn, Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from daygrid.model.calendar import Calendar
from daygrid.repository.calendar import CALENDAR_REPO
from daygrid.repository.configuration import CONFIGURATION_REPO
from daygrid.service.day_view import DayView
from daygrid.terminal.custom_typer import AliasedTyperGroup
from daygrid.view.header import header

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

console = Console()


def fail(message: str) -> NoReturn:
    console.print(f"[red]{escape(message)}[/red]")
    raise typer.Exit(1)


def resolve_calendar(calendar_id: Optional[str] = None) -> Calendar:
    """
    Find the calendar to work on.

    Args:
        calendar_id: A calendar id or id prefix, or None for the default calendar
    """
    calendars = CALENDAR_REPO.get_calendars()
    if calendar_id is None:
        calendar_id = CONFIGURATION_REPO.get_config()["default_calendar"]
        if calendar_id is None:
            fail("no default calendar is configured")

    matches = [c for c in calendars if c["id"].startswith(calendar_id)]
    exact = [c for c in matches if c["id"] == calendar_id]
    if exact:
        return exact[0]
    if len(matches) == 1:
        return matches[0]
    if not matches:
        fail(f"no calendar matches id '{calendar_id}'")
    fail(f"calendar id '{calendar_id}' is ambiguous")


def open_day_view(calendar: Calendar) -> DayView:
    config = CONFIGURATION_REPO.get_config()
    view = DayView(
        CALENDAR_REPO,
        slot_height=config["slot_height"],
        minutes_per_slot=config["minutes_per_slot"],
        next_color=config["next_event_color"],
    )
    view.show_calendar(calendar["id"])
    return view


def remember_next_color(view: DayView) -> None:
    if view.next_color != CONFIGURATION_REPO.get_config()["next_event_color"]:
        CONFIGURATION_REPO.update_config(next_event_color=view.next_color)


@app.command("list, ls")
def list_calendars() -> None:
    default_calendar = CONFIGURATION_REPO.get_config()["default_calendar"]

    header("calendars")
    table = Table(box=box.SIMPLE)
    table.add_column("id")
    table.add_column("name")
    table.add_column("events")
    table.add_column("default")

    for calendar in CALENDAR_REPO.get_calendars():
        table.add_row(
            calendar["id"][:8],
            escape(calendar["name"]),
            str(len(calendar["events"])),
            "✓" if calendar["id"] == default_calendar else "",
        )
    console.print(table)


@app.command("add, a")
def add(
    name: Annotated[
        Optional[str],
        typer.Argument(help="calendar name, defaults to today's date"),
    ] = None,
    use: Annotated[
        bool, typer.Option("--use", "-u", help="make it the default calendar")
    ] = False,
) -> None:
    calendar_id = CALENDAR_REPO.save_new_calendar(name)
    if use:
        CONFIGURATION_REPO.update_config(default_calendar=calendar_id)
    console.print(f"created calendar {calendar_id[:8]}")


@app.command("use, u", no_args_is_help=True)
def use(
    calendar_id: Annotated[str, typer.Argument(help="calendar id or id prefix")],
) -> None:
    calendar = resolve_calendar(calendar_id)
    CONFIGURATION_REPO.update_config(default_calendar=calendar["id"])
    console.print(f"default calendar is now {escape(calendar['name'])}")
