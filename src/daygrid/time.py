# SPDX-License-Identifier: MIT

import math
from typing import Optional

import pendulum

from daygrid.model.event import Event

GRID_START_HOUR = 5
MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR
# Minutes from 05:00 up to midnight, after which 00:00-04:59 wraps to the bottom
MAIN_SPAN_MINUTES = (24 - GRID_START_HOUR) * MINUTES_PER_HOUR
QUANTUM_MINUTES = 15
MIN_DURATION = 15


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def round_to_quantum(minutes: float) -> int:
    """Round a minute value to the nearest multiple of 15 (halves round up)."""
    return round_half_up(minutes / QUANTUM_MINUTES) * QUANTUM_MINUTES


def total_minutes(hour: int, minute: int) -> int:
    return hour * MINUTES_PER_HOUR + minute


def split_minutes(total: int) -> tuple[int, int]:
    return total // MINUTES_PER_HOUR, total % MINUTES_PER_HOUR


def normalize_minutes(total: int) -> int:
    return total % MINUTES_PER_DAY


def pixel_to_time(
    y: float, slot_height: float, minutes_per_slot: float
) -> tuple[int, int]:
    """
    Convert a vertical pixel offset within the grid to a quantized wall-clock time.

    The grid starts at 05:00 and runs to 23:59, after which 00:00-04:59 is
    appended at the bottom. Offsets outside the grid are clamped to its edges.

    Args:
        y: Pixel offset from the top of the grid
        slot_height: Height of one slot in pixels
        minutes_per_slot: Minutes represented by one slot

    Returns:
        Tuple of (hour, minute) with minute in {0, 15, 30, 45}
    """
    minutes_from_top = y / slot_height * minutes_per_slot
    minutes_from_top = min(max(minutes_from_top, 0.0), float(MINUTES_PER_DAY))

    if minutes_from_top < MAIN_SPAN_MINUTES:
        hour = GRID_START_HOUR + math.floor(minutes_from_top / MINUTES_PER_HOUR)
        minute = round_to_quantum(minutes_from_top % MINUTES_PER_HOUR)
    else:
        bottom_minutes = minutes_from_top - MAIN_SPAN_MINUTES
        hour = math.floor(bottom_minutes / MINUTES_PER_HOUR)
        minute = round_to_quantum(bottom_minutes % MINUTES_PER_HOUR)

    if minute < 0:
        minute = MINUTES_PER_HOUR + minute
        hour = (hour - 1 + 24) % 24
    if minute >= MINUTES_PER_HOUR:
        minute = 0
        hour = (hour + 1) % 24

    return hour % 24, minute


def grid_minutes(hour: int, minute: int) -> int:
    """Minutes from the top of the grid (05:00) to the given time."""
    if hour >= GRID_START_HOUR:
        return (hour - GRID_START_HOUR) * MINUTES_PER_HOUR + minute
    return MAIN_SPAN_MINUTES + hour * MINUTES_PER_HOUR + minute


def time_to_top(
    hour: int, minute: int, slot_height: float, minutes_per_slot: float
) -> float:
    return grid_minutes(hour, minute) / minutes_per_slot * slot_height


def duration_to_height(
    duration: int, slot_height: float, minutes_per_slot: float
) -> float:
    return duration / minutes_per_slot * slot_height


def commit_duration(start_total: int, end_total: int) -> int:
    """
    Duration in minutes between two times of day.

    A negative span means the gesture crossed midnight. The result is clamped
    to the minimum duration and rounded to the nearest 15 minutes.
    """
    duration = end_total - start_total
    if duration < 0:
        duration += MINUTES_PER_DAY
    if duration < MIN_DURATION:
        duration = MIN_DURATION
    return round_to_quantum(duration)


def event_start_minutes(event: Event) -> int:
    return total_minutes(event["start_hour"], event["start_minute"])


def event_end_minutes(event: Event) -> int:
    return event_start_minutes(event) + event["duration"]


def format_time(hour: int, minute: int) -> str:
    return pendulum.datetime(2000, 1, 1, hour % 24, minute).format("h:mm A")


def format_end_time(event: Event) -> str:
    end_hour, end_minute = split_minutes(normalize_minutes(event_end_minutes(event)))
    return format_time(end_hour, end_minute)


def format_range(event: Event) -> str:
    return (
        f"{format_time(event['start_hour'], event['start_minute'])} - "
        f"{format_end_time(event)}"
    )


def now_local() -> pendulum.DateTime:
    return pendulum.now("local")


def current_time_top(
    slot_height: float,
    minutes_per_slot: float,
    now: Optional[pendulum.DateTime] = None,
) -> float:
    """Pixel offset of the current-time indicator."""
    if now is None:
        now = now_local()
    return time_to_top(now.hour, now.minute, slot_height, minutes_per_slot)


def today_calendar_name(now: Optional[pendulum.DateTime] = None) -> str:
    if now is None:
        now = now_local()
    return now.format("ddd, MMM D")
