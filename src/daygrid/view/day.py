# SPDX-License-Identifier: MIT

import math
from typing import Optional

import pendulum
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from daygrid.color import (
    CURRENT_TIME_COLOR,
    PREVIEW_COLOR,
    SELECTED_COLOR,
    get_event_style,
)
from daygrid.model.event import Event
from daygrid.model.layout import EventLayout
from daygrid.service.day_view import DayView
from daygrid.service.layout import FULL_WIDTH
from daygrid.time import (
    GRID_START_HOUR,
    MINUTES_PER_DAY,
    MINUTES_PER_HOUR,
    format_end_time,
    format_range,
    format_time,
    grid_minutes,
    normalize_minutes,
    split_minutes,
)
from daygrid.view.header import header

DEFAULT_ROW_MINUTES = 30
DEFAULT_LANE_WIDTH = 60


class _Canvas:
    """A character grid for the events lane, one row per time step."""

    def __init__(self, rows: int, width: int) -> None:
        self.width = width
        self.chars = [[" "] * width for _ in range(rows)]
        self.styles: list[list[str]] = [[""] * width for _ in range(rows)]

    def fill(self, row: int, start: int, end: int, style: str) -> None:
        for column in range(start, end):
            self.chars[row][column] = " "
            self.styles[row][column] = style

    def write(self, row: int, start: int, end: int, text: str) -> None:
        for offset, char in enumerate(text[: max(end - start, 0)]):
            self.chars[row][start + offset] = char

    def line(self, row: int) -> Text:
        text = Text(no_wrap=True)
        for char, style in zip(self.chars[row], self.styles[row]):
            text.append(char, style=style or None)
        return text


def _row_label(row_start: int) -> str:
    hour, minute = split_minutes(
        normalize_minutes(GRID_START_HOUR * MINUTES_PER_HOUR + row_start)
    )
    if minute != 0:
        return ""
    return format_time(hour, minute)


def _lane_span(layout: EventLayout, lane_width: int) -> tuple[int, int]:
    start = math.floor(layout["left"] / FULL_WIDTH * lane_width)
    end = math.floor((layout["left"] + layout["width"]) / FULL_WIDTH * lane_width)
    start = min(start, lane_width - 1)
    return start, min(max(end, start + 1), lane_width)


def _row_span(
    hour: int, minute: int, duration: int, row_minutes: int, rows: int
) -> range:
    top = grid_minutes(hour, minute)
    bottom = top + duration
    return range(top // row_minutes, min(math.ceil(bottom / row_minutes), rows))


def _draw_event(
    canvas: _Canvas,
    event: Event,
    layout: EventLayout,
    row_minutes: int,
    selected: bool,
    draft: Optional[str],
) -> None:
    rows = _row_span(
        event["start_hour"],
        event["start_minute"],
        event["duration"],
        row_minutes,
        len(canvas.chars),
    )
    start, end = _lane_span(layout, canvas.width)

    style = f"white on {get_event_style(event['color'])}"
    if selected:
        style = f"{SELECTED_COLOR} underline on {get_event_style(event['color'])}"
    if layout["floating"]:
        style = f"{style} italic"

    title = event["title"] if draft is None else f"{draft}▏"
    if selected:
        title = f"● {title}"

    for index, row in enumerate(rows):
        canvas.fill(row, start, end, style)
        if index == 0:
            canvas.write(row, start, end, f" {title}")
        elif index == 1:
            canvas.write(row, start, end, f" {format_range(event)}")


def render_grid(
    view: DayView,
    row_minutes: int = DEFAULT_ROW_MINUTES,
    lane_width: int = DEFAULT_LANE_WIDTH,
    now: Optional[pendulum.DateTime] = None,
) -> Table:
    """
    Build the day grid for the view's calendar.

    The grid runs from 05:00 through the end of the day and then 00:00 to
    04:59. Events sit in horizontal lanes according to their layout, the
    dragged event floats on top, and a create preview is drawn over them.

    Args:
        view: The day view to render
        row_minutes: Minutes covered by each row
        lane_width: Width of the events lane in characters
        now: Time for the current-time marker, or None to omit it

    Returns:
        Rich table with a time column and an events column
    """
    rows = MINUTES_PER_DAY // row_minutes
    canvas = _Canvas(rows, lane_width)
    layouts = view.layouts()
    editing_event_id = view.editing_event_id

    # Floating events are drawn last so they stay on top
    for event in sorted(view.events, key=lambda e: layouts[e["id"]]["floating"]):
        _draw_event(
            canvas,
            event,
            layouts[event["id"]],
            row_minutes,
            selected=event["id"] in view.selection,
            draft=view.editing_draft if event["id"] == editing_event_id else None,
        )

    preview = view.preview()
    if preview is not None:
        hour, minute, duration = preview
        end_hour, end_minute = split_minutes(
            normalize_minutes(hour * MINUTES_PER_HOUR + minute + duration)
        )
        preview_rows = _row_span(hour, minute, duration, row_minutes, rows)
        for index, row in enumerate(preview_rows):
            canvas.fill(row, 0, lane_width, f"black on {PREVIEW_COLOR}")
            if index == 0:
                canvas.write(
                    row,
                    0,
                    lane_width,
                    f" {format_time(hour, minute)} - {format_time(end_hour, end_minute)}",
                )

    now_row = None
    if now is not None:
        now_row = grid_minutes(now.hour, now.minute) // row_minutes

    grid = Table(box=None, show_header=False, pad_edge=False)
    grid.add_column("time", justify="right", no_wrap=True, width=9, style="grey70")
    grid.add_column("events", no_wrap=True, width=lane_width)

    for row in range(rows):
        label: Text | str = _row_label(row * row_minutes)
        if row == now_row and now is not None:
            label = Text(format_time(now.hour, now.minute), style=CURRENT_TIME_COLOR)
        grid.add_row(label, canvas.line(row))

    return grid


def events_table(view: DayView, id_length: int = 8) -> Table:
    layouts = view.layouts()

    table = Table(box=box.SIMPLE)
    for column in ["id", "title", "start", "end", "duration", "column"]:
        table.add_column(column)

    for event in view.events:
        layout = layouts[event["id"]]
        style = get_event_style(event["color"])
        title = escape(event["title"])
        if event["id"] in view.selection:
            title = f"[{SELECTED_COLOR}]{title}[/{SELECTED_COLOR}]"
        table.add_row(
            event["id"][:id_length],
            f"[{style}]{title}[/{style}]",
            format_time(event["start_hour"], event["start_minute"]),
            format_end_time(event),
            str(event["duration"]),
            f"{layout['column'] + 1}/{layout['column_count']}",
        )

    return table


def day_view(
    view: DayView,
    calendar_name: str,
    row_minutes: int = DEFAULT_ROW_MINUTES,
    lane_width: int = DEFAULT_LANE_WIDTH,
    show_now: bool = True,
) -> None:
    header(calendar_name, "day")

    console = Console()
    console.print(
        render_grid(view, row_minutes, lane_width, view.now if show_now else None)
    )
    console.print(events_table(view))


def events_view(view: DayView, calendar_name: str) -> None:
    header(calendar_name, "events")

    console = Console()
    console.print(events_table(view))
