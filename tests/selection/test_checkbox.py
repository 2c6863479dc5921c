"""Tests for checkbox groups and the toggle/only/all interaction model."""

from __future__ import annotations

import pytest

from cuin.selection import CheckboxGroup, CheckboxMode, Zone, hover_mode, label_mode

ITEMS = ["react", "solid", "vue"]


def test_new_group_has_everything_checked() -> None:
    group = CheckboxGroup(ITEMS)

    assert group.checked == frozenset(ITEMS)
    assert group.checked_count() == group.total_count() == 3
    assert not group.is_filtered()


def test_group_ignores_unknown_items() -> None:
    group = CheckboxGroup(ITEMS, checked=["react", "angular"])
    group.toggle("angular")
    group.select_only_many(["angular"])

    assert group.checked == frozenset()
    assert group.universe == tuple(ITEMS)


def test_toggle_flips_one_item() -> None:
    group = CheckboxGroup(ITEMS)

    group.toggle("solid")
    assert group.unchecked == frozenset({"solid"})
    assert group.is_filtered()

    group.toggle("solid")
    assert not group.is_filtered()


def test_select_only_and_select_all_are_idempotent() -> None:
    group = CheckboxGroup(ITEMS)

    group.select_only("vue")
    group.select_only("vue")
    assert group.checked == frozenset({"vue"})

    group.clear()
    group.select_all()
    assert group.checked == frozenset(ITEMS)


@pytest.mark.parametrize(
    ("checked", "count", "expected"),
    [
        (True, 1, CheckboxMode.ALL),
        (True, 2, CheckboxMode.ONLY),
        (False, 1, CheckboxMode.ONLY),
        (False, 0, CheckboxMode.ONLY),
    ],
)
def test_label_mode(checked: bool, count: int, expected: CheckboxMode) -> None:
    assert label_mode(checked, count) is expected


def test_hover_mode_depends_on_zone() -> None:
    assert hover_mode(None, True, 1) is None
    assert hover_mode(Zone.CHECKBOX, True, 1) is CheckboxMode.TOGGLE
    assert hover_mode(Zone.LABEL, True, 1) is CheckboxMode.ALL
    assert CheckboxMode.ONLY.label == "Only"


def test_label_activation_is_a_two_cycle() -> None:
    group = CheckboxGroup(ITEMS)

    assert group.activate("solid", Zone.LABEL) is CheckboxMode.ONLY
    assert group.checked == frozenset({"solid"})

    assert group.activate("solid", Zone.LABEL) is CheckboxMode.ALL
    assert group.checked == frozenset(ITEMS)


def test_label_activation_from_nothing_checked_selects_only() -> None:
    group = CheckboxGroup(ITEMS, checked=[])

    assert group.mode_for("vue", Zone.LABEL) is CheckboxMode.ONLY
    group.activate("vue", Zone.LABEL)

    assert group.checked == frozenset({"vue"})


def test_checkbox_activation_toggles() -> None:
    group = CheckboxGroup(ITEMS)

    assert group.activate("react", Zone.CHECKBOX) is CheckboxMode.TOGGLE
    assert not group.is_selected("react")
