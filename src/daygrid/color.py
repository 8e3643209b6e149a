# SPDX-License-Identifier: MIT

from typing import Any

DEFAULT_EVENT_COLOR_INDEX = 0
PALETTE_SIZE = 6

# Rich styles per palette index, matching the order of the legacy hex colors
EVENT_COLORS = [
    "dodger_blue2",
    "green3",
    "gold1",
    "red3",
    "dark_violet",
    "dark_orange",
]

LEGACY_HEX_COLORS = {
    "#4285f4": 0,
    "#34a853": 1,
    "#fbbc04": 2,
    "#ea4335": 3,
    "#9c27b0": 4,
    "#ff9800": 5,
}

PREVIEW_COLOR = "grey50"
SELECTED_COLOR = "bold white"
CURRENT_TIME_COLOR = "bold black on bright_cyan"


def normalize_event_color(color: Any) -> int:
    """Coerce a stored color value into a palette index.

    Integers are clamped to the palette, legacy hex strings are mapped to their
    palette slot and anything else falls back to the default index.
    """
    if color is None or isinstance(color, bool):
        return DEFAULT_EVENT_COLOR_INDEX
    if isinstance(color, int):
        return min(max(color, 0), PALETTE_SIZE - 1)
    if isinstance(color, str):
        return LEGACY_HEX_COLORS.get(color.lower(), DEFAULT_EVENT_COLOR_INDEX)
    return DEFAULT_EVENT_COLOR_INDEX


def get_event_style(color: int) -> str:
    return EVENT_COLORS[normalize_event_color(color)]
