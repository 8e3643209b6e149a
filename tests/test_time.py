# SPDX-License-Identifier: MIT

import pendulum
import pytest

from daygrid.time import (
    commit_duration,
    current_time_top,
    format_range,
    format_time,
    grid_minutes,
    pixel_to_time,
    round_to_quantum,
    time_to_top,
    today_calendar_name,
)

from conftest import make_event


@pytest.mark.parametrize(
    "y, expected",
    [
        (0, (5, 0)),
        (120, (9, 0)),
        (180, (11, 0)),
        (570, (0, 0)),
        (705, (4, 30)),
    ],
)
def test_pixel_to_time_follows_grid_wrap(y: float, expected: tuple[int, int]) -> None:
    assert pixel_to_time(y, 30, 60) == expected


def test_pixel_to_time_quantizes_half_up() -> None:
    assert pixel_to_time(3.7, 30, 60) == (5, 0)
    assert pixel_to_time(3.75, 30, 60) == (5, 15)
    assert pixel_to_time(7.4, 30, 60) == (5, 15)


def test_pixel_to_time_rolls_minute_into_next_hour() -> None:
    assert pixel_to_time(29.9, 30, 60) == (6, 0)


def test_pixel_to_time_clamps_outside_grid() -> None:
    assert pixel_to_time(-50, 30, 60) == (5, 0)
    assert pixel_to_time(10_000, 30, 60) == (5, 0)


@pytest.mark.parametrize("slot_height, minutes_per_slot", [(30, 60), (48, 30), (20, 15)])
def test_time_round_trips_through_pixels(
    slot_height: float, minutes_per_slot: float
) -> None:
    for hour in range(24):
        for minute in (0, 15, 30, 45):
            top = time_to_top(hour, minute, slot_height, minutes_per_slot)
            assert pixel_to_time(top, slot_height, minutes_per_slot) == (hour, minute)


def test_quantization_is_idempotent() -> None:
    for minutes in [0, 7, 7.5, 8, 22.4, 37.5, 59.9, 121, 1439]:
        once = round_to_quantum(minutes)
        assert once % 15 == 0
        assert round_to_quantum(once) == once


def test_grid_minutes_puts_early_morning_at_the_bottom() -> None:
    assert grid_minutes(5, 0) == 0
    assert grid_minutes(23, 45) == 1125
    assert grid_minutes(0, 0) == 1140
    assert grid_minutes(4, 45) == 1425


def test_commit_duration() -> None:
    assert commit_duration(9 * 60, 11 * 60) == 120
    assert commit_duration(23 * 60, 60) == 120
    assert commit_duration(600, 605) == 15
    assert commit_duration(600, 600 + 52) == 45


def test_format_time_uses_twelve_hour_clock() -> None:
    assert format_time(0, 0) == "12:00 AM"
    assert format_time(9, 5) == "9:05 AM"
    assert format_time(13, 30) == "1:30 PM"


def test_format_range_wraps_past_midnight() -> None:
    event = make_event("a", 23, 30, duration=60)
    assert format_range(event) == "11:30 PM - 12:30 AM"


def test_current_time_top() -> None:
    now = pendulum.datetime(2024, 1, 1, 6, 30, tz="local")
    assert current_time_top(30, 60, now) == 45.0


def test_today_calendar_name() -> None:
    assert today_calendar_name(pendulum.datetime(2024, 3, 5)) == "Tue, Mar 5"
