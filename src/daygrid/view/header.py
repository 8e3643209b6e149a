# SPDX-License-Identifier: MIT

from typing import Optional

from rich import print
from rich.padding import Padding

from daygrid.view.state import get_show_header


def header(calendar_name: str, sub_header: Optional[str] = None) -> None:
    """Print the application header with the displayed calendar.

    Args:
        calendar_name: The name of the displayed calendar
        sub_header: Optional sub-header text to display
    """
    if not get_show_header():
        return

    print(Padding("[dark_orange]daygrid[/dark_orange]", (1, 0, 0, 1)))
    if sub_header is not None:
        print(Padding(f"[sandy_brown]{sub_header}[/sandy_brown]", (0, 1)))
    print(Padding(f"[plum1]{calendar_name}[/plum1]", (0, 1)))
