# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Any, Iterable, Optional, Protocol, cast

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from daygrid import configuration
from daygrid.color import normalize_event_color
from daygrid.model.calendar import Calendar, CalendarDocument
from daygrid.model.entity_id import EntityId
from daygrid.model.event import Event
from daygrid.template.calendar import (
    get_calendar_document_template,
    get_calendar_template,
)
from daygrid.template.event import DEFAULT_EVENT_TITLE

logger = logging.getLogger(__name__)


class CommitError(Exception):
    """Raised when a commit could not be applied to the calendar store."""


class CalendarStore(Protocol):
    def load_events(self, calendar_id: EntityId) -> list[Event]: ...

    def commit(
        self,
        calendar_id: EntityId,
        events: Event | Iterable[Event],
        removed_ids: Optional[Iterable[EntityId]] = None,
    ) -> None: ...


class CalendarRepository:
    def __init__(self) -> None:
        self._document: Optional[CalendarDocument] = None
        self.is_dirty = False

    @property
    def document(self) -> CalendarDocument:
        if self._document is None:
            self.__load_data()
        if self._document is None:
            raise ValueError()
        return self._document

    def __load_data(self) -> None:
        if not configuration.DATA_CALENDARS_PATH.is_file():
            self._document = get_calendar_document_template()
            return
        raw_document = load(configuration.DATA_CALENDARS_PATH.read_text(), Loader=Loader)
        if raw_document is None:
            self._document = get_calendar_document_template()
            return
        self._document = self.__convert_document_for_deserialization(raw_document)

    def __save_data(self) -> None:
        try:
            configuration.DATA_CALENDARS_PATH.parent.mkdir(parents=True, exist_ok=True)
            configuration.DATA_CALENDARS_PATH.write_text(
                dump(deepcopy(self.document), Dumper=Dumper, sort_keys=False)
            )
        except (OSError, YAMLError) as e:
            raise CommitError(
                f"could not write {configuration.DATA_CALENDARS_PATH}: {e}"
            ) from e

    def flush(self) -> bool:
        if self._document is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_document_for_deserialization(
        self, document: dict[str, Any]
    ) -> CalendarDocument:
        calendars: list[Calendar] = []
        for raw_calendar in document.get("calendars") or []:
            calendar_id = str(raw_calendar["id"])
            events = [
                self.__convert_event_for_deserialization(raw_event, calendar_id)
                for raw_event in raw_calendar.get("events") or []
            ]
            calendars.append(
                {
                    "id": calendar_id,
                    "name": raw_calendar.get("name") or "",
                    "events": events,
                }
            )
        return {"calendars": calendars}

    def __convert_event_for_deserialization(
        self, event: dict[str, Any], calendar_id: EntityId
    ) -> Event:
        # Older documents used camelCase keys
        return {
            "id": str(event["id"]),
            "calendar_id": calendar_id,
            "title": event.get("title") or DEFAULT_EVENT_TITLE,
            "start_hour": int(event.get("start_hour", event.get("startHour", 0))),
            "start_minute": int(
                event.get("start_minute", event.get("startMinute", 0))
            ),
            "duration": int(event.get("duration", 60)),
            "color": normalize_event_color(event.get("color")),
        }

    def __find_calendar(self, calendar_id: EntityId) -> Optional[Calendar]:
        for calendar in self.document["calendars"]:
            if calendar["id"] == calendar_id:
                return calendar
        return None

    def get_calendars(self) -> list[Calendar]:
        return deepcopy(self.document["calendars"])

    def get_calendar(self, calendar_id: EntityId) -> Optional[Calendar]:
        calendar = self.__find_calendar(calendar_id)
        if calendar is None:
            return None
        return deepcopy(calendar)

    def save_new_calendar(self, name: Optional[str] = None) -> EntityId:
        self.is_dirty = True

        calendar = get_calendar_template(name)
        self.document["calendars"].append(calendar)
        logger.debug("created calendar %s (%s)", calendar["id"], calendar["name"])
        return calendar["id"]

    def load_events(self, calendar_id: EntityId) -> list[Event]:
        calendar = self.__find_calendar(calendar_id)
        if calendar is None:
            return []
        return deepcopy(calendar["events"])

    def commit(
        self,
        calendar_id: EntityId,
        events: Event | Iterable[Event],
        removed_ids: Optional[Iterable[EntityId]] = None,
    ) -> None:
        """
        Merge changed events into a calendar.

        Parameters:
            calendar_id: The owning calendar
            events: A single event or a batch of events to insert or replace by id
            removed_ids: Ids of events to drop from the calendar

        A commit against an unknown calendar is ignored.
        """
        calendar = self.__find_calendar(calendar_id)
        if calendar is None:
            logger.debug("ignoring commit for unknown calendar %s", calendar_id)
            return

        if isinstance(events, dict):
            batch = [cast(Event, events)]
        else:
            batch = list(events)
        removed = set(removed_ids) if removed_ids is not None else set()

        self.is_dirty = True

        index_by_id = {event["id"]: i for i, event in enumerate(calendar["events"])}
        for event in batch:
            stored_event = deepcopy(event)
            stored_event["calendar_id"] = calendar_id
            if event["id"] in index_by_id:
                calendar["events"][index_by_id[event["id"]]] = stored_event
            else:
                calendar["events"].append(stored_event)
                index_by_id[event["id"]] = len(calendar["events"]) - 1

        if removed:
            calendar["events"] = [
                event for event in calendar["events"] if event["id"] not in removed
            ]

        logger.debug(
            "committed %d event(s), removed %d from calendar %s",
            len(batch),
            len(removed),
            calendar_id,
        )


CALENDAR_REPO = CalendarRepository()
