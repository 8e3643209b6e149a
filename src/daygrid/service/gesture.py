# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional, TypedDict

from daygrid.model.entity_id import EntityId
from daygrid.model.event import Event
from daygrid.model.session import (
    CreateSession,
    DragSession,
    EditSession,
    ResizeSession,
    Session,
    SessionKind,
)
from daygrid.template.event import DEFAULT_EVENT_TITLE, get_event_template
from daygrid.time import (
    MIN_DURATION,
    MINUTES_PER_DAY,
    commit_duration,
    event_start_minutes,
    normalize_minutes,
    pixel_to_time,
    round_to_quantum,
    split_minutes,
    time_to_top,
    total_minutes,
)

# Pointer travel below this many pixels is a click, not a drag
DRAG_THRESHOLD_PX = 5.0
HALF_DAY_MINUTES = MINUTES_PER_DAY // 2


class GestureResult(TypedDict):
    """
    What a gesture step produced.

    updates: local-only changes to show immediately
    commits: changed events to hand to the calendar store in one batch
    clicked: event id of a click that should go to the selection
    edit: event id that should enter title editing
    created: a newly created event
    """

    updates: list[Event]
    commits: list[Event]
    clicked: Optional[EntityId]
    edit: Optional[EntityId]
    created: Optional[Event]


def empty_result() -> GestureResult:
    return {
        "updates": [],
        "commits": [],
        "clicked": None,
        "edit": None,
        "created": None,
    }


def shift_start(event: Event, delta_minutes: int) -> Event:
    """Copy of `event` with its start moved by `delta_minutes`, wrapped into the day."""
    new_start = normalize_minutes(
        round_to_quantum(event_start_minutes(event) + delta_minutes)
    )
    hour, minute = split_minutes(new_start)
    shifted = deepcopy(event)
    shifted["start_hour"] = hour
    shifted["start_minute"] = minute
    return shifted


def wrap_delta(delta_minutes: int) -> int:
    """Pick the shorter way around the clock for a start-time change."""
    if abs(delta_minutes) > HALF_DAY_MINUTES:
        if delta_minutes > 0:
            return delta_minutes - MINUTES_PER_DAY
        return delta_minutes + MINUTES_PER_DAY
    return delta_minutes


class GestureMachine:
    """
    Turns pointer presses, moves and releases into quantized event changes.

    Only one session is active at a time. The machine never persists anything;
    it reports live updates and commits through GestureResult.
    """

    def __init__(self, slot_height: float = 30, minutes_per_slot: float = 60) -> None:
        self.slot_height = slot_height
        self.minutes_per_slot = minutes_per_slot
        self.session: Optional[Session] = None
        self._create_calendar_id: Optional[EntityId] = None
        self._create_color = 0

    @property
    def state(self) -> str:
        if self.session is None:
            return SessionKind.NONE
        return self.session.kind

    @property
    def is_idle(self) -> bool:
        return self.session is None

    @property
    def active_event_id(self) -> Optional[EntityId]:
        if isinstance(self.session, (DragSession, ResizeSession, EditSession)):
            return self.session.event_id
        return None

    @property
    def dragging_event_id(self) -> Optional[EntityId]:
        if isinstance(self.session, DragSession):
            return self.session.event_id
        return None

    def _pixel_to_time(self, y: float) -> tuple[int, int]:
        return pixel_to_time(y, self.slot_height, self.minutes_per_slot)

    def begin_create(
        self, x: float, y: float, calendar_id: EntityId, color: int
    ) -> None:
        self.session = CreateSession(x, y)
        self._create_calendar_id = calendar_id
        self._create_color = color

    def begin_drag(
        self,
        event: Event,
        x: float,
        y: float,
        selected_events: Optional[list[Event]] = None,
        from_title: bool = False,
    ) -> None:
        top = time_to_top(
            event["start_hour"],
            event["start_minute"],
            self.slot_height,
            self.minutes_per_slot,
        )
        selected_originals = None
        if selected_events is not None and len(selected_events) > 1:
            if any(selected["id"] == event["id"] for selected in selected_events):
                selected_originals = selected_events
        self.session = DragSession(
            event,
            x,
            y,
            offset_within_event=y - top,
            selected_originals=selected_originals,
            from_title=from_title,
        )

    def begin_resize(self, event: Event, x: float, y: float) -> None:
        self.session = ResizeSession(event, x, y)

    def begin_edit(self, event: Event) -> None:
        self.session = EditSession(event)

    def preview(self) -> Optional[tuple[int, int, int]]:
        """
        The start hour, start minute and duration a create gesture would produce.

        None unless a create gesture has passed the drag threshold.
        """
        session = self.session
        if not isinstance(session, CreateSession) or not session.previewing:
            return None
        return self._create_span(session)

    def _create_span(self, session: CreateSession) -> tuple[int, int, int]:
        anchor = self._pixel_to_time(session.start_y)
        current = self._pixel_to_time(session.current_y)
        if session.current_y >= session.start_y:
            start, end = anchor, current
        else:
            start, end = current, anchor
        duration = commit_duration(total_minutes(*start), total_minutes(*end))
        return start[0], start[1], duration

    def move(self, x: float, y: float) -> GestureResult:
        result = empty_result()
        session = self.session
        if session is None or isinstance(session, EditSession):
            return result

        session.move_to(x, y)

        if isinstance(session, CreateSession):
            if not session.previewing and session.displacement() >= DRAG_THRESHOLD_PX:
                session.previewing = True
        elif isinstance(session, DragSession):
            result["updates"] = self._drag_to(session, y)
        elif isinstance(session, ResizeSession):
            result["updates"] = [self._resize_to(session, y)]

        return result

    def _drag_to(self, session: DragSession, y: float) -> list[Event]:
        hour, minute = self._pixel_to_time(y - session.offset_within_event)
        moved = deepcopy(session.original)
        moved["start_hour"] = hour
        moved["start_minute"] = minute
        session.latest = moved

        if not session.is_multi_select:
            return [moved]

        # Others follow the dragged event's delta from their own original starts
        delta = wrap_delta(
            event_start_minutes(moved) - event_start_minutes(session.original)
        )
        return [
            moved if event_id == session.event_id else shift_start(original, delta)
            for event_id, original in session.originals.items()
        ]

    def _resize_to(self, session: ResizeSession, y: float) -> Event:
        delta_minutes = (y - session.start_y) / self.slot_height * self.minutes_per_slot
        resized = deepcopy(session.original)
        resized["duration"] = max(
            MIN_DURATION, round_to_quantum(session.original_duration + delta_minutes)
        )
        session.latest = resized
        return resized

    def release(self, x: float, y: float) -> GestureResult:
        """Finish the active pointer gesture. Editing is not finished by a release."""
        result = empty_result()
        session = self.session
        if session is None or isinstance(session, EditSession):
            return result

        self.session = None

        if isinstance(session, CreateSession):
            session.move_to(x, y)
            if session.displacement() < DRAG_THRESHOLD_PX:
                return result
            session.previewing = True
            result["created"] = self._created_event(session)
        elif isinstance(session, DragSession):
            if session.displacement(x, y) < DRAG_THRESHOLD_PX:
                # A click: put back anything a small wobble may have moved
                result["updates"] = list(session.originals.values()) or [
                    session.original
                ]
                if session.from_title:
                    result["edit"] = session.event_id
                else:
                    result["clicked"] = session.event_id
                return result
            result["updates"] = self._drag_to(session, y)
            result["commits"] = self._drag_commits(session, result["updates"])
        elif isinstance(session, ResizeSession):
            resized = self._resize_to(session, y)
            result["updates"] = [resized]
            if resized["duration"] != session.original_duration:
                result["commits"] = [resized]

        return result

    def _drag_commits(self, session: DragSession, moved: list[Event]) -> list[Event]:
        delta = event_start_minutes(session.latest) - event_start_minutes(
            session.original
        )
        if delta == 0:
            return []
        return moved

    def _created_event(self, session: CreateSession) -> Event:
        start_hour, start_minute, duration = self._create_span(session)
        event = get_event_template(self._create_calendar_id or "")
        event["start_hour"] = start_hour
        event["start_minute"] = start_minute
        event["duration"] = duration
        event["color"] = self._create_color
        return event

    def edit_title(self, text: str) -> None:
        if isinstance(self.session, EditSession):
            self.session.draft = text
            self.session.text_selected = False

    def finish_edit(self) -> GestureResult:
        """Leave title editing, committing the title only when it changed."""
        result = empty_result()
        session = self.session
        if not isinstance(session, EditSession):
            return result
        self.session = None

        title = session.draft.strip() or DEFAULT_EVENT_TITLE
        if title != session.original_title:
            retitled = deepcopy(session.original)
            retitled["title"] = title
            result["updates"] = [retitled]
            result["commits"] = [retitled]
        return result

    def cancel_edit(self) -> GestureResult:
        result = empty_result()
        session = self.session
        if not isinstance(session, EditSession):
            return result
        self.session = None
        result["updates"] = [session.original]
        return result
