# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from daygrid.terminal.calendar import open_day_view, resolve_calendar
from daygrid.terminal.custom_typer import AliasedTyperGroup
from daygrid.view import day as day_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("day, d")
def day(
    calendar_id: Annotated[
        Optional[str],
        typer.Option("--calendar", "-c", help="calendar id or id prefix"),
    ] = None,
    granularity: Annotated[
        int,
        typer.Option("--granularity", "-g", help="minutes per row: 15, 30 or 60"),
    ] = day_report.DEFAULT_ROW_MINUTES,
    width: Annotated[
        int, typer.Option("--width", "-w", help="width of the events lane")
    ] = day_report.DEFAULT_LANE_WIDTH,
    show_now: Annotated[
        bool,
        typer.Option("--now/--no-now", help="mark the current time"),
    ] = True,
) -> None:
    if granularity not in (15, 30, 60):
        raise typer.BadParameter(f"Granularity must be 15, 30 or 60, got {granularity}")
    if width < 10:
        raise typer.BadParameter(f"Width must be at least 10, got {width}")

    calendar = resolve_calendar(calendar_id)
    view = open_day_view(calendar)
    view.tick()
    day_report.day_view(view, calendar["name"], granularity, width, show_now)
