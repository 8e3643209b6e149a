# SPDX-License-Identifier: MIT


class HitTarget:
    """Surfaces a pointer press can land on."""

    GRID = "grid"
    EVENT_BODY = "event_body"
    EVENT_TITLE = "event_title"
    RESIZE_HANDLE = "resize_handle"
    DELETE_CONTROL = "delete_control"
    TOOLS_MENU = "tools_menu"
    COLOR_MENU = "color_menu"
    OUTSIDE = "outside"


EVENT_TARGETS = (HitTarget.EVENT_BODY, HitTarget.EVENT_TITLE, HitTarget.RESIZE_HANDLE)

# Presses on these never clear the selection
SELECTION_PRESERVING_TARGETS = EVENT_TARGETS + (
    HitTarget.DELETE_CONTROL,
    HitTarget.TOOLS_MENU,
    HitTarget.COLOR_MENU,
)
