# SPDX-License-Identifier: MIT

from daygrid.color import DEFAULT_EVENT_COLOR_INDEX
from daygrid.model.entity_id import EntityId, generate_entity_id
from daygrid.model.event import Event

DEFAULT_EVENT_TITLE = "New Event"


def get_event_template(calendar_id: EntityId) -> Event:
    return {
        "id": generate_entity_id(),
        "calendar_id": calendar_id,
        "title": DEFAULT_EVENT_TITLE,
        "start_hour": 9,
        "start_minute": 0,
        "duration": 60,
        "color": DEFAULT_EVENT_COLOR_INDEX,
    }
