# SPDX-License-Identifier: MIT

from typing import TypedDict


class EventLayout(TypedDict):
    """
    Horizontal placement of an event within the day grid.

    left and width are percentages of the events column. floating is set for
    the event being dragged, which renders above the grid at full width.
    """

    left: float
    width: float
    column: int
    column_count: int
    floating: bool
