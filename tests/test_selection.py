# SPDX-License-Identifier: MIT

from daygrid.service.selection import Selection


def test_plain_click_replaces_selection() -> None:
    selection = Selection()
    selection.replace(["a", "b"])

    selection.click("c")

    assert selection.ids == {"c"}


def test_plain_click_on_sole_selection_deselects() -> None:
    selection = Selection()
    selection.click("a")
    selection.click("a")

    assert len(selection) == 0


def test_plain_click_on_member_of_larger_selection_keeps_only_it() -> None:
    selection = Selection()
    selection.replace(["a", "b"])

    selection.click("a")

    assert selection.ids == {"a"}


def test_shift_click_toggles_membership() -> None:
    selection = Selection()
    selection.click("a")
    selection.click("b", shift=True)
    assert list(selection) == ["a", "b"]

    selection.click("a", shift=True)
    assert list(selection) == ["b"]
    assert "a" not in selection


def test_clear_and_discard() -> None:
    selection = Selection()
    selection.replace(["a", "b", "c"])

    selection.discard("b")
    assert selection.ids == {"a", "c"}

    selection.clear()
    assert selection.ids == set()
