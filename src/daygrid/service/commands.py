# SPDX-License-Identifier: MIT

from typing import Any, Optional

from daygrid.model.entity_id import EntityId
from daygrid.model.event import Event
from daygrid.model.hit_target import HitTarget
from daygrid.service.day_view import DayView
from daygrid.service.gesture import DRAG_THRESHOLD_PX
from daygrid.time import (
    MIN_DURATION,
    duration_to_height,
    round_to_quantum,
    time_to_top,
)

# Synthesized gestures also slide sideways so short drags still clear the click threshold
SIDEWAYS_PX = DRAG_THRESHOLD_PX


class UnknownEventError(LookupError):
    pass


def _require_event(view: DayView, event_id: EntityId) -> Event:
    event = view.get_event(event_id)
    if event is None:
        raise UnknownEventError(event_id)
    return event


def _event_top(view: DayView, event: Event) -> float:
    return time_to_top(
        event["start_hour"], event["start_minute"], view.slot_height, view.minutes_per_slot
    )


def _click(view: DayView, target: str, y: float, event_id: EntityId, shift: bool) -> None:
    view.pointer_down(0, y, target, event_id, shift=shift)
    view.pointer_up(0, y)


def select_events(view: DayView, event_ids: list[EntityId]) -> None:
    """Click the first event, then shift-click the rest."""
    view.selection.clear()
    for index, event_id in enumerate(event_ids):
        event = _require_event(view, event_id)
        body_y = _event_top(view, event) + 1
        _click(view, HitTarget.EVENT_BODY, body_y, event_id, shift=index > 0)


def create_event(
    view: DayView,
    start_hour: int,
    start_minute: int,
    duration: int,
    title: Optional[str] = None,
    color: Optional[int] = None,
) -> Optional[Event]:
    """
    Create an event by dragging across the empty grid.

    A span running past the bottom of the grid is finished with a resize.

    Returns:
        The created event, or None if the drag did not produce one
    """
    if color is not None:
        view.next_color = color
    start_y = time_to_top(start_hour, start_minute, view.slot_height, view.minutes_per_slot)
    end_y = start_y + duration_to_height(duration, view.slot_height, view.minutes_per_slot)

    known_ids = {event["id"] for event in view.events}
    view.pointer_down(0, start_y, HitTarget.GRID)
    view.pointer_move(SIDEWAYS_PX, end_y)
    view.pointer_up(SIDEWAYS_PX, end_y)

    created_ids = [event["id"] for event in view.events if event["id"] not in known_ids]
    if not created_ids:
        return None
    created_id = created_ids[0]
    if title is not None:
        view.edit_title(title)
    view.key_down("Enter")

    created = _require_event(view, created_id)
    if created["duration"] != round_to_quantum(max(duration, MIN_DURATION)):
        created = resize_event(view, created_id, duration)
    return created


def move_events(
    view: DayView,
    event_ids: list[EntityId],
    start_hour: int,
    start_minute: int,
) -> list[Event]:
    """
    Drag the first event to a new start; any others move with it as a selection.

    Returns:
        The moved events as they now stand
    """
    grabbed = _require_event(view, event_ids[0])
    if len(event_ids) > 1:
        select_events(view, event_ids)

    grab_y = _event_top(view, grabbed) + 1
    drop_y = time_to_top(start_hour, start_minute, view.slot_height, view.minutes_per_slot) + 1

    view.pointer_down(0, grab_y, HitTarget.EVENT_BODY, grabbed["id"])
    view.pointer_move(SIDEWAYS_PX, drop_y)
    view.pointer_up(SIDEWAYS_PX, drop_y)
    return [_require_event(view, event_id) for event_id in event_ids]


def resize_event(view: DayView, event_id: EntityId, duration: int) -> Event:
    event = _require_event(view, event_id)
    handle_y = _event_top(view, event) + duration_to_height(
        event["duration"], view.slot_height, view.minutes_per_slot
    )
    delta_y = duration_to_height(
        duration - event["duration"], view.slot_height, view.minutes_per_slot
    )

    view.pointer_down(0, handle_y, HitTarget.RESIZE_HANDLE, event_id)
    view.pointer_move(SIDEWAYS_PX, handle_y + delta_y)
    view.pointer_up(SIDEWAYS_PX, handle_y + delta_y)
    return _require_event(view, event_id)


def retitle_event(view: DayView, event_id: EntityId, title: str) -> Event:
    event = _require_event(view, event_id)
    _click(view, HitTarget.EVENT_TITLE, _event_top(view, event) + 1, event_id, shift=False)
    view.edit_title(title)
    view.key_down("Enter")
    return _require_event(view, event_id)


def recolor_events(view: DayView, event_ids: list[EntityId], color: int) -> int:
    select_events(view, event_ids)
    return view.change_color(color)


def delete_events(view: DayView, event_ids: list[EntityId]) -> int:
    select_events(view, event_ids)
    view.key_down("Delete")
    return len(event_ids) - sum(1 for event_id in event_ids if view.get_event(event_id))


def replay(view: DayView, steps: list[dict[str, Any]]) -> None:
    """
    Feed a scripted input session through the view.

    Each step is a mapping with an `action` of down, move, up, key, type, blur,
    color or tick. Pointer steps take `x` (percent of the events column) and
    `y` (pixels); `down` may name a `target` and `event` instead of relying on
    hit testing, and may set `shift`.
    """
    for step in steps:
        action = step["action"]
        x = float(step.get("x", 0))
        y = float(step.get("y", 0))
        if action == "down":
            target = step.get("target")
            event_id = step.get("event")
            if target is None:
                target, event_id = view.hit_test(x, y)
            view.pointer_down(x, y, target, event_id, shift=bool(step.get("shift", False)))
        elif action == "move":
            view.pointer_move(x, y)
        elif action == "up":
            view.pointer_up(x, y)
        elif action == "key":
            view.key_down(str(step["key"]))
        elif action == "type":
            view.edit_title(str(step["text"]))
        elif action == "blur":
            view.blur()
        elif action == "color":
            view.change_color(int(step["color"]))
        elif action == "tick":
            view.tick()
        else:
            raise ValueError(f"unknown replay action: {action}")
