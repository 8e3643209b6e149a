# SPDX-License-Identifier: MIT

import re
from typing import Iterable, Optional

import typer

from daygrid.color import PALETTE_SIZE
from daygrid.model.entity_id import EntityId
from daygrid.model.event import Event
from daygrid.time import MINUTES_PER_HOUR, QUANTUM_MINUTES

TIME_PATTERN = re.compile(r"(?P<hour>\d{1,2}):(?P<minute>\d{2})")


def parse_time(time_str: Optional[str]) -> Optional[tuple[int, int]]:
    """
    Parse a grid time such as "9:00" or "17:45".

    The day grid snaps to quarter hours, so minutes must be 00, 15, 30 or 45.

    Raises:
        typer.BadParameter: If the text is not (H)H:mm or does not land on the grid
    """
    if time_str is None:
        return None

    match = TIME_PATTERN.fullmatch(time_str.strip())
    if match is None:
        raise typer.BadParameter(f"expected (H)H:mm such as 9:00 or 17:30, got '{time_str}'")

    hour, minute = int(match["hour"]), int(match["minute"])
    if hour > 23:
        raise typer.BadParameter(f"hour {hour} is past 23")
    if minute >= MINUTES_PER_HOUR or minute % QUANTUM_MINUTES:
        raise typer.BadParameter(
            f"'{time_str}' is off the grid; minutes must be a multiple of {QUANTUM_MINUTES}"
        )

    return hour, minute


def parse_color(color: Optional[int]) -> Optional[int]:
    if color is None:
        return None
    if color < 0 or color >= PALETTE_SIZE:
        raise typer.BadParameter(
            f"Color must be a palette index between 0 and {PALETTE_SIZE - 1}, got {color}"
        )
    return color


def parse_duration(duration: Optional[int]) -> Optional[int]:
    if duration is None:
        return None
    if duration <= 0:
        raise typer.BadParameter(f"Duration must be positive, got {duration}")
    return duration


class UnresolvedIdError(LookupError):
    pass


def resolve_event_id(id_prefix: str, events: Iterable[Event]) -> EntityId:
    """
    Match a full event id or an unambiguous prefix of one.

    Raises:
        UnresolvedIdError: If nothing matches or the prefix is ambiguous
    """
    matches = [event["id"] for event in events if event["id"].startswith(id_prefix)]
    if id_prefix in matches:
        return id_prefix
    if len(matches) == 1:
        return matches[0]
    if not matches:
        raise UnresolvedIdError(f"no event matches id '{id_prefix}'")
    raise UnresolvedIdError(f"id '{id_prefix}' is ambiguous ({len(matches)} events)")
