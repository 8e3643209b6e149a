# SPDX-License-Identifier: MIT

from typing import Optional

from daygrid.model.calendar import Calendar, CalendarDocument
from daygrid.model.entity_id import generate_entity_id
from daygrid.time import today_calendar_name


def get_calendar_template(name: Optional[str] = None) -> Calendar:
    return {
        "id": generate_entity_id(),
        "name": name if name is not None else today_calendar_name(),
        "events": [],
    }


def get_calendar_document_template() -> CalendarDocument:
    return {"calendars": []}
