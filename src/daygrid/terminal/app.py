# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from daygrid.terminal import calendar, configuration, event, session, view
from daygrid.terminal.custom_typer import OrderedTyperGroup
from daygrid.view import state as view_state

app = typer.Typer(
    cls=OrderedTyperGroup,
    help="daygrid - a single-day calendar grid in the terminal",
    no_args_is_help=True,
)
app.add_typer(event.app, name="event, e")
app.add_typer(view.app, name="view, v")
app.add_typer(session.app, name="session, s")
app.add_typer(calendar.app, name="calendar, cal")
app.add_typer(configuration.app, name="config, c")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in views",
        ),
    ] = False,
) -> None:
    """
    daygrid - a single-day calendar grid in the terminal

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)


def run() -> None:
    app()
