# SPDX-License-Identifier: MIT

from typing import TypedDict

from daygrid.model.entity_id import EntityId
from daygrid.model.event import Event


class Calendar(TypedDict):
    id: EntityId
    name: str
    events: list[Event]


class CalendarDocument(TypedDict):
    """
    The persisted shape of all calendars:

    {calendars: [{id, name, events: [{id, calendar_id, title, start_hour,
    start_minute, duration, color}]}]}
    """

    calendars: list[Calendar]
