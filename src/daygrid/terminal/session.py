# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from yaml import YAMLError, load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]

from daygrid.service import commands
from daygrid.terminal.calendar import (
    fail,
    open_day_view,
    remember_next_color,
    resolve_calendar,
)
from daygrid.terminal.custom_typer import AliasedTyperGroup
from daygrid.view import day as day_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def load_script(path: Path) -> list[dict[str, Any]]:
    """
    Read a pointer script.

    The file holds either a list of steps or a mapping with a `steps` list.
    """
    try:
        document = load(path.read_text(), Loader=Loader)
    except (OSError, YAMLError) as e:
        raise typer.BadParameter(f"could not read script {path}: {e}")

    if isinstance(document, dict):
        document = document.get("steps")
    if not isinstance(document, list) or not all(
        isinstance(step, dict) and "action" in step for step in document
    ):
        raise typer.BadParameter(
            f"script {path} must be a list of steps, each with an action"
        )
    return document


@app.command("replay, r", no_args_is_help=True)
def replay(
    script: Annotated[Path, typer.Argument(help="YAML pointer script")],
    calendar_id: Annotated[
        Optional[str],
        typer.Option("--calendar", "-c", help="calendar id or id prefix"),
    ] = None,
    show_grid: Annotated[
        bool, typer.Option("--grid/--no-grid", help="render the day grid afterwards")
    ] = True,
) -> None:
    """Feed recorded pointer and keyboard input through the day view."""
    steps = load_script(script)

    calendar = resolve_calendar(calendar_id)
    view = open_day_view(calendar)
    try:
        commands.replay(view, steps)
    except (KeyError, ValueError) as e:
        fail(f"bad replay step: {e}")
    remember_next_color(view)

    if show_grid:
        day_report.day_view(view, calendar["name"], show_now=False)
    else:
        day_report.events_view(view, calendar["name"])
