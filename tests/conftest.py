# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path
from typing import Iterable, Optional

import pytest

from daygrid import configuration
from daygrid.model.entity_id import EntityId
from daygrid.model.event import Event
from daygrid.repository.calendar import CALENDAR_REPO, CommitError
from daygrid.repository.configuration import CONFIGURATION_REPO

CALENDAR_ID = "cal-1"


def make_event(
    event_id: str,
    start_hour: int,
    start_minute: int = 0,
    duration: int = 60,
    title: Optional[str] = None,
    color: int = 0,
    calendar_id: str = CALENDAR_ID,
) -> Event:
    return {
        "id": event_id,
        "calendar_id": calendar_id,
        "title": title if title is not None else event_id.upper(),
        "start_hour": start_hour,
        "start_minute": start_minute,
        "duration": duration,
        "color": color,
    }


class FakeStore:
    """In-memory calendar store that records every commit call."""

    def __init__(self, events: Iterable[Event] = (), fail: bool = False) -> None:
        self.events: dict[EntityId, Event] = {e["id"]: deepcopy(e) for e in events}
        self.fail = fail
        self.commits: list[tuple[EntityId, list[Event], list[EntityId]]] = []

    def load_events(self, calendar_id: EntityId) -> list[Event]:
        return [
            deepcopy(e) for e in self.events.values() if e["calendar_id"] == calendar_id
        ]

    def commit(
        self,
        calendar_id: EntityId,
        events: Event | Iterable[Event],
        removed_ids: Optional[Iterable[EntityId]] = None,
    ) -> None:
        if self.fail:
            raise CommitError("store unavailable")
        batch = [events] if isinstance(events, dict) else list(events)
        removed = sorted(removed_ids) if removed_ids is not None else []
        self.commits.append((calendar_id, deepcopy(batch), removed))
        for event in batch:
            self.events[event["id"]] = deepcopy(event)
        for event_id in removed:
            self.events.pop(event_id, None)


@pytest.fixture
def data_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point configuration and data files at a temporary directory."""
    config_path = tmp_path / "config"
    data_path = tmp_path / "data"
    monkeypatch.setattr(configuration, "CONFIG_PATH", config_path)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_path / "config.yaml")
    monkeypatch.setattr(configuration, "DATA_PATH", data_path)
    monkeypatch.setattr(
        configuration, "DATA_CALENDARS_PATH", data_path / "calendars.yaml"
    )

    # The repositories are process-wide singletons; start each test empty
    monkeypatch.setattr(CALENDAR_REPO, "_document", None)
    monkeypatch.setattr(CALENDAR_REPO, "is_dirty", False)
    monkeypatch.setattr(CONFIGURATION_REPO, "_config", None)
    monkeypatch.setattr(CONFIGURATION_REPO, "is_dirty", False)
    return tmp_path
