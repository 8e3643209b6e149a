# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from daygrid.model.entity_id import EntityId
from daygrid.service import commands
from daygrid.service.day_view import DayView
from daygrid.terminal.calendar import (
    console,
    fail,
    open_day_view,
    remember_next_color,
    resolve_calendar,
)
from daygrid.terminal.custom_typer import AliasedTyperGroup
from daygrid.terminal.parse import (
    UnresolvedIdError,
    parse_color,
    parse_duration,
    parse_time,
    resolve_event_id,
)
from daygrid.time import MINUTES_PER_DAY, total_minutes
from daygrid.view import day as day_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DEFAULT_DURATION = 60

CalendarOption = Annotated[
    Optional[str],
    typer.Option("--calendar", "-c", help="calendar id or id prefix"),
]


def _resolve_ids(view: DayView, id_prefixes: list[str]) -> list[EntityId]:
    try:
        resolved = [resolve_event_id(prefix, view.events) for prefix in id_prefixes]
    except UnresolvedIdError as e:
        fail(str(e))
    return list(dict.fromkeys(resolved))


@app.command("add, a", no_args_is_help=True)
def add(
    title: Annotated[str, typer.Argument(help="event title")],
    start: Annotated[
        str,
        typer.Option("--start", "-s", help="valid input: (H)H:mm"),
    ],
    end: Annotated[
        Optional[str],
        typer.Option("--end", "-e", help="valid input: (H)H:mm"),
    ] = None,
    duration: Annotated[
        Optional[int],
        typer.Option("--duration", "-d", help="minutes"),
    ] = None,
    color: Annotated[
        Optional[int],
        typer.Option("--color", "-col", help="palette index 0-5"),
    ] = None,
    calendar_id: CalendarOption = None,
) -> None:
    start_time = parse_time(start)
    end_time = parse_time(end)
    duration = parse_duration(duration)
    color = parse_color(color)
    if start_time is None:
        raise typer.BadParameter("--start is required")
    if end_time is not None and duration is not None:
        raise typer.BadParameter("use either --end or --duration, not both")

    if end_time is not None:
        duration = (total_minutes(*end_time) - total_minutes(*start_time)) % MINUTES_PER_DAY
        if duration == 0:
            raise typer.BadParameter("--end must differ from --start")
    if duration is None:
        duration = DEFAULT_DURATION

    calendar = resolve_calendar(calendar_id)
    view = open_day_view(calendar)
    created = commands.create_event(
        view, start_time[0], start_time[1], duration, title=title, color=color
    )
    if created is None:
        fail("event could not be created")
    remember_next_color(view)

    view.selection.replace([created["id"]])
    day_report.events_view(view, calendar["name"])


@app.command("list, ls")
def list_events(calendar_id: CalendarOption = None) -> None:
    calendar = resolve_calendar(calendar_id)
    view = open_day_view(calendar)
    day_report.events_view(view, calendar["name"])


@app.command("move, m", no_args_is_help=True)
def move(
    ids: Annotated[
        list[str],
        typer.Argument(help="event ids; several move together keeping their spacing"),
    ],
    to: Annotated[
        str,
        typer.Option("--to", "-t", help="new start of the first event: (H)H:mm"),
    ],
    calendar_id: CalendarOption = None,
) -> None:
    start_time = parse_time(to)
    if start_time is None:
        raise typer.BadParameter("--to is required")

    calendar = resolve_calendar(calendar_id)
    view = open_day_view(calendar)
    event_ids = _resolve_ids(view, ids)
    commands.move_events(view, event_ids, start_time[0], start_time[1])

    view.selection.replace(event_ids)
    day_report.events_view(view, calendar["name"])


@app.command("resize, r", no_args_is_help=True)
def resize(
    id: Annotated[str, typer.Argument(help="event id")],
    duration: Annotated[int, typer.Option("--duration", "-d", help="minutes")],
    calendar_id: CalendarOption = None,
) -> None:
    duration = parse_duration(duration) or DEFAULT_DURATION

    calendar = resolve_calendar(calendar_id)
    view = open_day_view(calendar)
    event_id = _resolve_ids(view, [id])[0]
    commands.resize_event(view, event_id, duration)

    view.selection.replace([event_id])
    day_report.events_view(view, calendar["name"])


@app.command("title, t", no_args_is_help=True)
def title(
    id: Annotated[str, typer.Argument(help="event id")],
    text: Annotated[str, typer.Argument(help="new title; blank resets it")],
    calendar_id: CalendarOption = None,
) -> None:
    calendar = resolve_calendar(calendar_id)
    view = open_day_view(calendar)
    event_id = _resolve_ids(view, [id])[0]
    commands.retitle_event(view, event_id, text)

    view.selection.replace([event_id])
    day_report.events_view(view, calendar["name"])


@app.command("color, col", no_args_is_help=True)
def color(
    ids: Annotated[list[str], typer.Argument(help="event ids")],
    index: Annotated[int, typer.Option("--index", "-i", help="palette index 0-5")],
    calendar_id: CalendarOption = None,
) -> None:
    """Recolor events; the color also becomes the default for new events."""
    index = parse_color(index) or 0

    calendar = resolve_calendar(calendar_id)
    view = open_day_view(calendar)
    event_ids = _resolve_ids(view, ids)
    commands.recolor_events(view, event_ids, index)
    remember_next_color(view)

    day_report.events_view(view, calendar["name"])


@app.command("delete, d", no_args_is_help=True)
def delete(
    ids: Annotated[list[str], typer.Argument(help="event ids")],
    calendar_id: CalendarOption = None,
) -> None:
    calendar = resolve_calendar(calendar_id)
    view = open_day_view(calendar)
    event_ids = _resolve_ids(view, ids)
    deleted = commands.delete_events(view, event_ids)

    console.print(f"deleted {deleted} event(s)")
    day_report.events_view(view, calendar["name"])
