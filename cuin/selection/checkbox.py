"""Checked-set groups and the toggle/only/all checkbox interaction model.

Every checkable row has two zones. The checkbox itself always toggles its
item. The label derives its action from the group: when the item is the only
checked one the label restores the whole group ("all"), in every other case
it narrows the group to that item ("only").
"""

from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Iterable, Optional, Tuple


class CheckboxMode(str, Enum):
    TOGGLE = "toggle"
    ONLY = "only"
    ALL = "all"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Zone(str, Enum):
    CHECKBOX = "checkbox"
    LABEL = "label"


def label_mode(checked: bool, checked_count: int) -> CheckboxMode:
    """Return the action a label click performs for an item."""
    if checked and checked_count == 1:
        return CheckboxMode.ALL
    return CheckboxMode.ONLY


def hover_mode(zone: Optional[Zone], checked: bool, checked_count: int) -> Optional[CheckboxMode]:
    """Return the affordance shown while hovering ``zone``; ``None`` when idle."""
    if zone is None:
        return None
    if zone is Zone.CHECKBOX:
        return CheckboxMode.TOGGLE
    return label_mode(checked, checked_count)


class CheckboxGroup:
    """A fixed universe of items with a mutable checked subset.

    All mutations ignore items outside the universe, and a freshly built group
    has every item checked.
    """

    def __init__(self, universe: Iterable[str], checked: Optional[Iterable[str]] = None) -> None:
        self._universe: Tuple[str, ...] = tuple(dict.fromkeys(universe))
        self._members = frozenset(self._universe)
        if checked is None:
            self._checked: set[str] = set(self._universe)
        else:
            self._checked = {item for item in checked if item in self._members}

    @property
    def universe(self) -> Tuple[str, ...]:
        return self._universe

    @property
    def checked(self) -> FrozenSet[str]:
        return frozenset(self._checked)

    @property
    def unchecked(self) -> FrozenSet[str]:
        return self._members - self._checked

    def is_selected(self, item: str) -> bool:
        return item in self._checked

    def checked_count(self) -> int:
        return len(self._checked)

    def total_count(self) -> int:
        return len(self._universe)

    def is_filtered(self) -> bool:
        return len(self._checked) != len(self._universe)

    def toggle(self, item: str) -> None:
        if item not in self._members:
            return
        if item in self._checked:
            self._checked.discard(item)
        else:
            self._checked.add(item)

    def select_only(self, item: str) -> None:
        self.select_only_many([item])

    def select_only_many(self, items: Iterable[str]) -> None:
        self._checked = {item for item in items if item in self._members}

    def select_all(self) -> None:
        self._checked = set(self._universe)

    def clear(self) -> None:
        """Remove the filter, which means checking every item again."""
        self.select_all()

    def mode_for(self, item: str, zone: Optional[Zone]) -> Optional[CheckboxMode]:
        return hover_mode(zone, self.is_selected(item), self.checked_count())

    def activate(self, item: str, zone: Zone) -> CheckboxMode:
        """Apply the action for a click on ``zone`` of ``item``'s row."""
        if zone is Zone.CHECKBOX:
            self.toggle(item)
            return CheckboxMode.TOGGLE
        mode = label_mode(self.is_selected(item), self.checked_count())
        if mode is CheckboxMode.ALL:
            self.select_all()
        else:
            self.select_only(item)
        return mode

    def __repr__(self) -> str:
        return f"CheckboxGroup(checked={self.checked_count()}/{self.total_count()})"
