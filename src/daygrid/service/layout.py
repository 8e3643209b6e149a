# SPDX-License-Identifier: MIT

from typing import Iterable, Mapping, Optional

from daygrid.model.entity_id import EntityId
from daygrid.model.event import Event
from daygrid.model.layout import EventLayout
from daygrid.time import event_end_minutes, event_start_minutes

FULL_WIDTH = 100.0
# Percentage shaved off each column per column in the region, leaving a gap
COLUMN_GAP_PERCENT = 0.3
MIN_WIDTH_FACTOR = 0.97


def overlaps(a: Event, b: Event) -> bool:
    """
    True when two events share any time.

    Events that merely abut (one ends exactly when the other starts) do not
    overlap; events starting at the same time always do.
    """
    return event_start_minutes(a) < event_end_minutes(b) and event_start_minutes(
        b
    ) < event_end_minutes(a)


def _sort_key(event: Event) -> tuple[int, str]:
    return event_start_minutes(event), event["id"]


def find_overlap_region(event: Event, all_events: Iterable[Event]) -> list[Event]:
    """
    Collect every event connected to `event` through a chain of overlaps.

    Overlap is not transitive, so the region grows until no remaining event
    overlaps any event already in it.

    Returns:
        The region, ordered by start time then id
    """
    candidates = [e for e in all_events if e["id"] != event["id"]]
    region: dict[EntityId, Event] = {event["id"]: event}

    changed = True
    while changed:
        changed = False
        for candidate in candidates:
            if candidate["id"] in region:
                continue
            if any(overlaps(candidate, member) for member in region.values()):
                region[candidate["id"]] = candidate
                changed = True

    return sorted(region.values(), key=_sort_key)


def max_simultaneous(region: Iterable[Event]) -> int:
    """Largest number of events active at any start or end instant of the region."""
    events = list(region)
    if not events:
        return 0

    boundaries: set[int] = set()
    for event in events:
        boundaries.add(event_start_minutes(event))
        boundaries.add(event_end_minutes(event))

    return max(
        sum(
            1
            for event in events
            if event_start_minutes(event) <= instant < event_end_minutes(event)
        )
        for instant in boundaries
    )


def column_width(column_count: int) -> float:
    if column_count <= 1:
        return FULL_WIDTH
    base_width = FULL_WIDTH / column_count
    return max(
        base_width - column_count * COLUMN_GAP_PERCENT, base_width * MIN_WIDTH_FACTOR
    )


def _fits(event: Event, column: list[Event]) -> bool:
    return not any(overlaps(event, occupant) for occupant in column)


def assign_columns(
    region: Iterable[Event], bias: Optional[Mapping[EntityId, int]] = None
) -> dict[EntityId, int]:
    """
    Greedy interval-graph coloring of a region.

    Events with a bias column are placed first (in bias order) and keep that
    column when it is free; everything else takes the leftmost free column or
    opens a new one.

    Returns:
        Mapping of event id to column index
    """
    if bias is None:
        bias = {}

    def order(event: Event) -> tuple[int, int, int, str]:
        if event["id"] in bias:
            return (0, bias[event["id"]], event_start_minutes(event), event["id"])
        return (1, 0, event_start_minutes(event), event["id"])

    columns: list[list[Event]] = []
    event_to_column: dict[EntityId, int] = {}

    for event in sorted(region, key=order):
        preferred = bias.get(event["id"])
        if (
            preferred is not None
            and preferred < len(columns)
            and _fits(event, columns[preferred])
        ):
            columns[preferred].append(event)
            event_to_column[event["id"]] = preferred
            continue

        assigned_column = -1
        for column_index, column in enumerate(columns):
            if _fits(event, column):
                assigned_column = column_index
                break

        if assigned_column == -1:
            assigned_column = len(columns)
            columns.append([])

        columns[assigned_column].append(event)
        event_to_column[event["id"]] = assigned_column

    return event_to_column


def _place_dropped_rightmost(
    dropped: Event, region: list[Event], others: Mapping[EntityId, int]
) -> int:
    """Column for a freshly dropped event, given the columns of everything else."""
    rightmost = max(others.values())
    occupants = [event for event in region if others.get(event["id"]) == rightmost]
    if _fits(dropped, occupants):
        return rightmost
    return rightmost + 1


def _full_width_layout(floating: bool = False) -> EventLayout:
    return {
        "left": 0.0,
        "width": FULL_WIDTH,
        "column": 0,
        "column_count": 1,
        "floating": floating,
    }


def calculate_event_layout(
    event: Event,
    all_events: list[Event],
    dragging_event_id: Optional[EntityId] = None,
    dropped_event_id: Optional[EntityId] = None,
    column_snapshot: Optional[Mapping[EntityId, int]] = None,
) -> EventLayout:
    """
    Work out where one event sits horizontally.

    Args:
        event: The event to lay out
        all_events: Every event on the displayed calendar
        dragging_event_id: The event currently being dragged, if any
        dropped_event_id: The event that was just released, if any
        column_snapshot: Columns captured when the current or last drag began

    Returns:
        The event's layout
    """
    if column_snapshot is None:
        column_snapshot = {}

    # The dragged event floats above the grid and never competes for a column
    if dragging_event_id == event["id"]:
        return _full_width_layout(floating=True)

    stationary_events = (
        [e for e in all_events if e["id"] != dragging_event_id]
        if dragging_event_id is not None
        else all_events
    )

    if not any(
        e["id"] != event["id"] and overlaps(event, e) for e in stationary_events
    ):
        return _full_width_layout()

    region = find_overlap_region(event, stationary_events)
    region_ids = {e["id"] for e in region}

    bias: dict[EntityId, int] = {}
    if dragging_event_id is None and any(
        event_id in region_ids for event_id in column_snapshot
    ):
        bias = {
            event_id: column
            for event_id, column in column_snapshot.items()
            if event_id in region_ids
        }

    dropped = None
    if dropped_event_id is not None and dropped_event_id not in column_snapshot:
        dropped = next((e for e in region if e["id"] == dropped_event_id), None)

    if dropped is None:
        event_to_column = assign_columns(region, bias)
    else:
        # Stationary events keep their columns; the newcomer is fitted around them
        event_to_column = assign_columns(
            [e for e in region if e["id"] != dropped["id"]], bias
        )
        event_to_column[dropped["id"]] = _place_dropped_rightmost(
            dropped, region, event_to_column
        )

    column_count = max(max_simultaneous(region), max(event_to_column.values()) + 1)
    column = event_to_column[event["id"]]

    return {
        "left": column * (FULL_WIDTH / column_count),
        "width": column_width(column_count),
        "column": column,
        "column_count": column_count,
        "floating": False,
    }


def layout_day(
    events: list[Event],
    dragging_event_id: Optional[EntityId] = None,
    dropped_event_id: Optional[EntityId] = None,
    column_snapshot: Optional[Mapping[EntityId, int]] = None,
) -> dict[EntityId, EventLayout]:
    return {
        event["id"]: calculate_event_layout(
            event, events, dragging_event_id, dropped_event_id, column_snapshot
        )
        for event in events
    }


def snapshot_columns(event: Event, events: list[Event]) -> dict[EntityId, int]:
    """
    Capture the current columns of the region around `event`.

    Used when a drag begins so the layout can be held steady through the drop.
    An event with no overlaps yields an empty snapshot.
    """
    if not any(e["id"] != event["id"] and overlaps(event, e) for e in events):
        return {}
    return assign_columns(find_overlap_region(event, events))
