"""View state held in context variables."""

# SPDX-License-Identifier: MIT

from contextvars import ContextVar

# Default is True (show headers)
_show_header_var: ContextVar[bool] = ContextVar("show_header", default=True)


def set_show_header(value: bool) -> None:
    """Set whether headers should be displayed above views.

    Args:
        value: True to show headers, False to hide them
    """
    _show_header_var.set(value)


def get_show_header() -> bool:
    return _show_header_var.get()
