# SPDX-License-Identifier: MIT

import pytest

from daygrid.service import commands
from daygrid.service.day_view import DayView

from conftest import CALENDAR_ID, FakeStore, make_event


@pytest.fixture
def store() -> FakeStore:
    return FakeStore(
        [
            make_event("a", 9, 0, 60),
            make_event("b", 11, 0, 30),
            make_event("c", 14, 0, 60),
        ]
    )


@pytest.fixture
def view(store: FakeStore) -> DayView:
    view = DayView(store)
    view.show_calendar(CALENDAR_ID)
    return view


def test_create_event(view: DayView, store: FakeStore) -> None:
    created = commands.create_event(view, 16, 30, 45, title="Review", color=5)

    assert created is not None
    assert (created["start_hour"], created["start_minute"]) == (16, 30)
    assert created["duration"] == 45
    assert created["title"] == "Review"
    assert created["color"] == 5
    assert store.events[created["id"]]["title"] == "Review"
    assert view.editing_event_id is None


def test_create_event_running_past_grid_bottom(view: DayView) -> None:
    created = commands.create_event(view, 4, 0, 120)

    assert created is not None
    assert (created["start_hour"], created["duration"]) == (4, 120)
    assert created["title"] == "New Event"


def test_move_single_event(view: DayView, store: FakeStore) -> None:
    commands.move_events(view, ["a"], 10, 15)

    assert (store.events["a"]["start_hour"], store.events["a"]["start_minute"]) == (
        10,
        15,
    )


def test_move_several_events_keeps_spacing(view: DayView, store: FakeStore) -> None:
    moved = commands.move_events(view, ["a", "c"], 8, 0)

    assert [(e["id"], e["start_hour"]) for e in moved] == [("a", 8), ("c", 13)]
    assert store.events["b"]["start_hour"] == 11


def test_resize_event(view: DayView, store: FakeStore) -> None:
    resized = commands.resize_event(view, "b", 90)

    assert resized["duration"] == 90
    assert store.events["b"]["duration"] == 90


def test_retitle_event(view: DayView, store: FakeStore) -> None:
    commands.retitle_event(view, "a", "  Planning ")

    assert store.events["a"]["title"] == "Planning"


def test_recolor_events(view: DayView, store: FakeStore) -> None:
    assert commands.recolor_events(view, ["a", "b"], 2) == 2

    assert store.events["a"]["color"] == 2
    assert store.events["b"]["color"] == 2
    assert store.events["c"]["color"] == 0


def test_delete_events(view: DayView, store: FakeStore) -> None:
    assert commands.delete_events(view, ["a", "c"]) == 2

    assert list(store.events) == ["b"]
    assert len(view.selection) == 0


def test_unknown_event_raises(view: DayView) -> None:
    with pytest.raises(commands.UnknownEventError):
        commands.resize_event(view, "nope", 30)


def test_replay_create_and_title(view: DayView, store: FakeStore) -> None:
    steps = [
        {"action": "down", "x": 10, "y": 390},
        {"action": "move", "x": 10, "y": 420},
        {"action": "up", "x": 10, "y": 420},
        {"action": "type", "text": "Gym"},
        {"action": "key", "key": "Enter"},
    ]

    commands.replay(view, steps)

    created = [e for e in store.events.values() if e["title"] == "Gym"]
    assert len(created) == 1
    assert (created[0]["start_hour"], created[0]["duration"]) == (18, 60)


def test_replay_uses_hit_testing_for_drags(view: DayView, store: FakeStore) -> None:
    steps = [
        {"action": "down", "x": 50, "y": 125},
        {"action": "move", "x": 50, "y": 185},
        {"action": "up", "x": 50, "y": 185},
    ]

    commands.replay(view, steps)

    assert store.events["a"]["start_hour"] == 11


def test_replay_rejects_unknown_action(view: DayView) -> None:
    with pytest.raises(ValueError):
        commands.replay(view, [{"action": "dance"}])
