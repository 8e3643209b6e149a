# SPDX-License-Identifier: MIT

from daygrid.model.session import SessionKind
from daygrid.service.gesture import GestureMachine, shift_start, wrap_delta

from conftest import CALENDAR_ID, make_event


def test_create_drag_produces_quantized_event() -> None:
    machine = GestureMachine(slot_height=30, minutes_per_slot=60)

    machine.begin_create(0, 120, CALENDAR_ID, color=2)
    assert machine.state == SessionKind.PENDING_CREATE
    machine.move(0, 180)
    assert machine.state == SessionKind.PREVIEWING_CREATE
    assert machine.preview() == (9, 0, 120)

    result = machine.release(0, 180)

    created = result["created"]
    assert created is not None
    assert (created["start_hour"], created["start_minute"]) == (9, 0)
    assert created["duration"] == 120
    assert created["color"] == 2
    assert created["title"] == "New Event"
    assert created["calendar_id"] == CALENDAR_ID
    assert machine.is_idle


def test_upward_create_swaps_anchor_and_pointer() -> None:
    machine = GestureMachine()
    machine.begin_create(0, 180, CALENDAR_ID, color=0)
    machine.move(0, 120)

    created = machine.release(0, 120)["created"]

    assert created is not None
    assert (created["start_hour"], created["start_minute"], created["duration"]) == (
        9,
        0,
        120,
    )


def test_create_below_threshold_is_discarded() -> None:
    machine = GestureMachine()
    machine.begin_create(0, 120, CALENDAR_ID, color=0)
    machine.move(0, 123)
    assert machine.preview() is None

    result = machine.release(0, 123)

    assert result["created"] is None
    assert machine.is_idle


def test_short_create_gets_minimum_duration() -> None:
    machine = GestureMachine()
    machine.begin_create(0, 120, CALENDAR_ID, color=0)
    created = machine.release(6, 121)["created"]
    assert created is not None
    assert created["duration"] == 15


def test_drag_moves_by_grab_offset_and_commits() -> None:
    event = make_event("a", 9, 0, 60)
    machine = GestureMachine()
    machine.begin_drag(event, 0, 125)

    updates = machine.move(0, 155)["updates"]
    assert [(e["start_hour"], e["start_minute"]) for e in updates] == [(10, 0)]

    result = machine.release(0, 155)
    assert [(e["start_hour"], e["start_minute"]) for e in result["commits"]] == [(10, 0)]
    assert result["clicked"] is None


def test_drag_back_to_origin_commits_nothing() -> None:
    event = make_event("a", 9, 0, 60)
    machine = GestureMachine()
    machine.begin_drag(event, 0, 125)
    machine.move(0, 200)

    result = machine.release(10, 125)

    assert result["commits"] == []
    assert result["updates"][0]["start_hour"] == 9


def test_multi_select_drag_moves_selection_rigidly() -> None:
    a = make_event("a", 9, 0)
    b = make_event("b", 11, 30)
    machine = GestureMachine()
    machine.begin_drag(a, 0, 125, selected_events=[a, b])

    result = machine.release(0, 155)

    moved = {e["id"]: (e["start_hour"], e["start_minute"]) for e in result["commits"]}
    assert moved == {"a": (10, 0), "b": (12, 30)}


def test_drag_of_unselected_event_ignores_selection() -> None:
    a = make_event("a", 9, 0)
    b = make_event("b", 11, 0)
    c = make_event("c", 13, 0)
    machine = GestureMachine()
    machine.begin_drag(a, 0, 125, selected_events=[b, c])

    result = machine.release(0, 155)

    assert [e["id"] for e in result["commits"]] == ["a"]


def test_small_wobble_is_a_click_and_restores_position() -> None:
    event = make_event("a", 9, 0)
    machine = GestureMachine()
    machine.begin_drag(event, 0, 125)
    machine.move(0, 128)

    result = machine.release(0, 128)

    assert result["clicked"] == "a"
    assert result["commits"] == []
    assert result["updates"][0]["start_hour"] == 9


def test_click_on_title_requests_editing() -> None:
    event = make_event("a", 9, 0)
    machine = GestureMachine()
    machine.begin_drag(event, 0, 121, from_title=True)

    result = machine.release(1, 121)

    assert result["edit"] == "a"
    assert result["clicked"] is None


def test_resize_clamps_to_minimum_duration() -> None:
    event = make_event("a", 10, 0, 30)
    machine = GestureMachine()
    bottom = 150 + 15
    machine.begin_resize(event, 0, bottom)

    result = machine.release(0, bottom - 60)

    assert [e["duration"] for e in result["commits"]] == [15]


def test_resize_quantizes_to_quarter_hours() -> None:
    event = make_event("a", 10, 0, 30)
    machine = GestureMachine()
    machine.begin_resize(event, 0, 165)

    updates = machine.move(0, 165 + 19)["updates"]
    assert updates[0]["duration"] == 75


def test_resize_without_change_commits_nothing() -> None:
    event = make_event("a", 10, 0, 30)
    machine = GestureMachine()
    machine.begin_resize(event, 0, 165)

    assert machine.release(0, 166)["commits"] == []


def test_finish_edit_trims_and_commits_changed_title() -> None:
    machine = GestureMachine()
    machine.begin_edit(make_event("a", 9, 0, title="Meeting"))
    machine.edit_title("  Lunch  ")

    result = machine.finish_edit()

    assert [e["title"] for e in result["commits"]] == ["Lunch"]
    assert machine.is_idle


def test_blank_title_falls_back_to_default() -> None:
    machine = GestureMachine()
    machine.begin_edit(make_event("a", 9, 0, title="Meeting"))
    machine.edit_title("   ")

    assert [e["title"] for e in machine.finish_edit()["commits"]] == ["New Event"]


def test_unchanged_title_commits_nothing() -> None:
    machine = GestureMachine()
    machine.begin_edit(make_event("a", 9, 0, title="Meeting"))
    machine.edit_title("Meeting ")

    assert machine.finish_edit()["commits"] == []


def test_cancel_edit_restores_original() -> None:
    machine = GestureMachine()
    machine.begin_edit(make_event("a", 9, 0, title="Meeting"))
    machine.edit_title("Something else")

    result = machine.cancel_edit()

    assert result["commits"] == []
    assert result["updates"][0]["title"] == "Meeting"


def test_pointer_input_is_ignored_while_editing() -> None:
    machine = GestureMachine()
    machine.begin_edit(make_event("a", 9, 0))

    assert machine.move(0, 300)["updates"] == []
    assert machine.release(0, 300)["commits"] == []
    assert machine.state == SessionKind.EDITING


def test_wrap_delta_takes_the_short_way_round() -> None:
    assert wrap_delta(60) == 60
    assert wrap_delta(1380) == -60
    assert wrap_delta(-1380) == 60
    assert wrap_delta(720) == 720


def test_shift_start_wraps_into_the_day() -> None:
    shifted = shift_start(make_event("a", 23, 30), 60)
    assert (shifted["start_hour"], shifted["start_minute"]) == (0, 30)
    shifted = shift_start(make_event("a", 0, 15), -30)
    assert (shifted["start_hour"], shifted["start_minute"]) == (23, 45)
