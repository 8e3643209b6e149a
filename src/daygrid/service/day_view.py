# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Iterable, Optional

import pendulum

from daygrid.color import DEFAULT_EVENT_COLOR_INDEX, normalize_event_color
from daygrid.model.entity_id import EntityId
from daygrid.model.event import Event
from daygrid.model.hit_target import SELECTION_PRESERVING_TARGETS, HitTarget
from daygrid.model.layout import EventLayout
from daygrid.model.session import EditSession, SessionKind
from daygrid.repository.calendar import CalendarStore, CommitError
from daygrid.service.gesture import GestureMachine, GestureResult
from daygrid.service.layout import layout_day, snapshot_columns
from daygrid.service.selection import Selection
from daygrid.time import (
    MINUTES_PER_DAY,
    current_time_top,
    duration_to_height,
    event_start_minutes,
    now_local,
    time_to_top,
)

logger = logging.getLogger(__name__)

# Pixel bands within an event that select the title and the resize handle
TITLE_BAND_PX = 16.0
RESIZE_HANDLE_PX = 6.0

DELETE_KEYS = ("Delete", "Backspace")


class DayView:
    """
    Interaction engine for a single day of one calendar.

    Holds the displayed events as an optimistic local copy, routes pointer and
    keyboard input through the gesture machine and the selection, and hands
    finished changes to the calendar store.
    """

    def __init__(
        self,
        store: CalendarStore,
        slot_height: float = 30,
        minutes_per_slot: float = 60,
        next_color: int = DEFAULT_EVENT_COLOR_INDEX,
    ) -> None:
        self.store = store
        self.slot_height = slot_height
        self.minutes_per_slot = minutes_per_slot
        self.next_color = normalize_event_color(next_color)
        self.calendar_id: Optional[EntityId] = None
        self.selection = Selection()
        self.gesture = GestureMachine(slot_height, minutes_per_slot)
        self.color_menu_open = False
        self.now: pendulum.DateTime = now_local()
        self._events: dict[EntityId, Event] = {}
        self._column_snapshot: dict[EntityId, int] = {}
        self._drop_layouts: Optional[dict[EntityId, EventLayout]] = None
        self._press_shift = False

    @property
    def events(self) -> list[Event]:
        return sorted(
            self._events.values(), key=lambda e: (event_start_minutes(e), e["id"])
        )

    @property
    def grid_height(self) -> float:
        return MINUTES_PER_DAY / self.minutes_per_slot * self.slot_height

    @property
    def editing_event_id(self) -> Optional[EntityId]:
        if self.gesture.state == SessionKind.EDITING:
            return self.gesture.active_event_id
        return None

    @property
    def editing_draft(self) -> Optional[str]:
        session = self.gesture.session
        if isinstance(session, EditSession):
            return session.draft
        return None

    def get_event(self, event_id: EntityId) -> Optional[Event]:
        event = self._events.get(event_id)
        return deepcopy(event) if event is not None else None

    def show_calendar(self, calendar_id: EntityId) -> None:
        """Switch to a calendar, dropping any selection and gesture state."""
        self.calendar_id = calendar_id
        self._events = {
            event["id"]: event for event in self.store.load_events(calendar_id)
        }
        self.selection.clear()
        self.gesture.session = None
        self._column_snapshot = {}
        self._drop_layouts = None

    def tick(self, now: Optional[pendulum.DateTime] = None) -> float:
        """Refresh the current-time indicator; gestures are left untouched."""
        self.now = now if now is not None else now_local()
        return current_time_top(self.slot_height, self.minutes_per_slot, self.now)

    def layouts(self) -> dict[EntityId, EventLayout]:
        if self._drop_layouts is not None:
            return self._drop_layouts
        return layout_day(
            self.events,
            dragging_event_id=self.gesture.dragging_event_id,
            column_snapshot=self._column_snapshot,
        )

    def preview(self) -> Optional[tuple[int, int, int]]:
        return self.gesture.preview()

    def hit_test(self, x_percent: float, y: float) -> tuple[str, Optional[EntityId]]:
        """
        Find what lies under a point.

        Args:
            x_percent: Horizontal position as a percentage of the events column
            y: Vertical pixel offset from the top of the grid

        Returns:
            Tuple of (hit target, event id or None)
        """
        if y < 0 or y >= self.grid_height or x_percent < 0 or x_percent > 100:
            return HitTarget.OUTSIDE, None

        layouts = self.layouts()
        # The floating event is drawn on top, then later events over earlier ones
        ordered = sorted(
            self.events,
            key=lambda e: (layouts[e["id"]]["floating"], event_start_minutes(e)),
            reverse=True,
        )
        for event in ordered:
            layout = layouts[event["id"]]
            top = time_to_top(
                event["start_hour"],
                event["start_minute"],
                self.slot_height,
                self.minutes_per_slot,
            )
            height = duration_to_height(
                event["duration"], self.slot_height, self.minutes_per_slot
            )
            if not (top <= y < top + height):
                continue
            if not (layout["left"] <= x_percent < layout["left"] + layout["width"]):
                continue
            if y >= top + height - RESIZE_HANDLE_PX:
                return HitTarget.RESIZE_HANDLE, event["id"]
            if y < top + TITLE_BAND_PX:
                return HitTarget.EVENT_TITLE, event["id"]
            return HitTarget.EVENT_BODY, event["id"]

        return HitTarget.GRID, None

    def pointer_down(
        self,
        x: float,
        y: float,
        target: str,
        event_id: Optional[EntityId] = None,
        shift: bool = False,
    ) -> None:
        """
        Handle a pointer press.

        Args:
            x: Horizontal pointer position in pixels
            y: Vertical pixel offset from the top of the grid
            target: The HitTarget the press landed on
            event_id: The event under the pointer for event targets
            shift: Whether the multi-select modifier is held
        """
        self._press_shift = shift

        # Any press closes open chrome before it does anything else
        if self.color_menu_open and target != HitTarget.COLOR_MENU:
            self.color_menu_open = False

        editing_event_id = self.editing_event_id
        if editing_event_id is not None:
            if target == HitTarget.EVENT_TITLE and event_id == editing_event_id:
                return
            self._apply(self.gesture.finish_edit())

        if not self.gesture.is_idle:
            logger.debug("ignoring press during %s", self.gesture.state)
            return

        self._drop_layouts = None

        if target not in SELECTION_PRESERVING_TARGETS:
            self.selection.clear()

        if target == HitTarget.COLOR_MENU:
            self.color_menu_open = not self.color_menu_open
            return
        if target == HitTarget.DELETE_CONTROL:
            self.delete_selected()
            return
        if self.calendar_id is None:
            return

        if target == HitTarget.GRID:
            self.gesture.begin_create(x, y, self.calendar_id, self.next_color)
            return

        event = self._events.get(event_id) if event_id is not None else None
        if event is None:
            return

        if target == HitTarget.RESIZE_HANDLE:
            self.gesture.begin_resize(event, x, y)
        elif target == HitTarget.EVENT_TITLE and shift:
            self.selection.click(event["id"], shift=True)
        elif target in (HitTarget.EVENT_BODY, HitTarget.EVENT_TITLE):
            self._column_snapshot = snapshot_columns(event, self.events)
            self.gesture.begin_drag(
                event,
                x,
                y,
                selected_events=self._selected_events(),
                from_title=target == HitTarget.EVENT_TITLE,
            )

    def pointer_move(self, x: float, y: float) -> None:
        result = self.gesture.move(x, y)
        if result["updates"]:
            self._drop_layouts = None
        self._apply(result)

    def pointer_up(self, x: float, y: float) -> None:
        dragging_event_id = self.gesture.dragging_event_id
        result = self.gesture.release(x, y)
        self._apply(result)

        if dragging_event_id is not None:
            if result["commits"]:
                self._drop_layouts = layout_day(
                    self.events,
                    dropped_event_id=dragging_event_id,
                    column_snapshot=self._column_snapshot,
                )
            self._column_snapshot = {}

    def key_down(self, key: str) -> None:
        if self.editing_event_id is not None:
            if key == "Enter":
                self._apply(self.gesture.finish_edit())
            elif key == "Escape":
                self._apply(self.gesture.cancel_edit())
            return

        if key in DELETE_KEYS:
            self.delete_selected()

    def edit_title(self, text: str) -> None:
        self.gesture.edit_title(text)

    def blur(self) -> None:
        if self.editing_event_id is not None:
            self._apply(self.gesture.finish_edit())

    def begin_edit(self, event_id: EntityId) -> None:
        event = self._events.get(event_id)
        if event is not None and self.gesture.is_idle:
            self.gesture.begin_edit(event)

    def change_color(self, color: int) -> int:
        """
        Set the color for the next new event and recolor the selection.

        Returns:
            Number of selected events recolored
        """
        self.next_color = normalize_event_color(color)
        self.color_menu_open = False

        recolored = []
        for event in self._selected_events():
            if event["color"] != self.next_color:
                event = deepcopy(event)
                event["color"] = self.next_color
                recolored.append(event)

        if recolored:
            self._store_locally(recolored)
            self._commit(recolored)
        return len(recolored)

    def delete_selected(self) -> int:
        """
        Remove every selected event in one batch and clear the selection.

        Returns:
            Number of events deleted
        """
        doomed = [event_id for event_id in self.selection if event_id in self._events]
        self.selection.clear()
        if not doomed:
            return 0

        for event_id in doomed:
            del self._events[event_id]
        self._drop_layouts = None
        self._commit([], removed_ids=doomed)
        return len(doomed)

    def _selected_events(self) -> list[Event]:
        return [
            deepcopy(self._events[event_id])
            for event_id in self.selection
            if event_id in self._events
        ]

    def _store_locally(self, events: Iterable[Event]) -> None:
        for event in events:
            self._events[event["id"]] = deepcopy(event)

    def _apply(self, result: GestureResult) -> None:
        self._store_locally(result["updates"])

        if result["commits"]:
            self._store_locally(result["commits"])
            self._commit(result["commits"])

        if result["clicked"] is not None:
            self.selection.click(result["clicked"], shift=self._press_shift)

        created = result["created"]
        if created is not None:
            self._store_locally([created])
            self._commit([created])
            self.gesture.begin_edit(created)

        if result["edit"] is not None:
            self.begin_edit(result["edit"])

    def _commit(
        self, events: list[Event], removed_ids: Optional[list[EntityId]] = None
    ) -> bool:
        if self.calendar_id is None:
            return False
        try:
            self.store.commit(self.calendar_id, events, removed_ids)
        except CommitError as e:
            # Local state stays as the user left it
            logger.warning("commit to calendar %s failed: %s", self.calendar_id, e)
            return False
        return True
