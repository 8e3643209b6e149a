# SPDX-License-Identifier: MIT

from typing import TypedDict

from daygrid.model.entity_id import EntityId


class Event(TypedDict):
    id: EntityId
    calendar_id: EntityId
    title: str
    start_hour: int
    start_minute: int
    duration: int
    color: int
