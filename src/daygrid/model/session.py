# SPDX-License-Identifier: MIT

import math
from copy import deepcopy
from typing import Optional

from daygrid.model.entity_id import EntityId
from daygrid.model.event import Event


class SessionKind:
    NONE = "none"
    PENDING_CREATE = "pending_create"
    PREVIEWING_CREATE = "previewing_create"
    DRAGGING = "dragging"
    RESIZING = "resizing"
    EDITING = "editing"


class Session:
    """Base for a single pointer or editing session."""

    kind: str = SessionKind.NONE

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.start_x = x
        self.start_y = y
        self.current_x = x
        self.current_y = y

    def move_to(self, x: float, y: float) -> None:
        self.current_x = x
        self.current_y = y

    def displacement(self, x: Optional[float] = None, y: Optional[float] = None) -> float:
        end_x = self.current_x if x is None else x
        end_y = self.current_y if y is None else y
        return math.hypot(end_x - self.start_x, end_y - self.start_y)


class CreateSession(Session):
    """Covers both PendingCreate and PreviewingCreate; previewing flips once."""

    def __init__(self, x: float, y: float) -> None:
        super().__init__(x, y)
        self.previewing = False

    @property
    def kind(self) -> str:  # type: ignore[override]
        if self.previewing:
            return SessionKind.PREVIEWING_CREATE
        return SessionKind.PENDING_CREATE


class DragSession(Session):
    kind = SessionKind.DRAGGING

    def __init__(
        self,
        event: Event,
        x: float,
        y: float,
        offset_within_event: float,
        selected_originals: Optional[list[Event]] = None,
        from_title: bool = False,
    ) -> None:
        super().__init__(x, y)
        self.event_id: EntityId = event["id"]
        self.offset_within_event = offset_within_event
        self.original = deepcopy(event)
        self.latest = deepcopy(event)
        self.originals: dict[EntityId, Event] = {}
        if selected_originals:
            for selected in selected_originals:
                self.originals[selected["id"]] = deepcopy(selected)
        self.from_title = from_title

    @property
    def is_multi_select(self) -> bool:
        return len(self.originals) > 1 and self.event_id in self.originals


class ResizeSession(Session):
    kind = SessionKind.RESIZING

    def __init__(self, event: Event, x: float, y: float) -> None:
        super().__init__(x, y)
        self.event_id: EntityId = event["id"]
        self.original_duration = event["duration"]
        self.original = deepcopy(event)
        self.latest = deepcopy(event)


class EditSession(Session):
    kind = SessionKind.EDITING

    def __init__(self, event: Event) -> None:
        super().__init__()
        self.event_id: EntityId = event["id"]
        self.original = deepcopy(event)
        self.original_title = event["title"]
        self.draft = event["title"]
        # Entering edit mode selects the whole title
        self.text_selected = True
