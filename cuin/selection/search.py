"""Debounced text search over the values of one prop."""

from __future__ import annotations

from typing import List, Optional

from ..props_analyze import PropAnalysis, PropValueDistribution
from .checkbox import CheckboxGroup
from .debounce import DEFAULT_DELAY_MS, Debouncer, TimerFactory, _thread_timer


class ValueSearch:
    """Narrows the visible value rows of a prop section.

    ``query`` follows every keystroke; ``debounced_query`` only takes the last
    value once input has been quiet for the debounce delay, and it is the one
    the result list is computed from.
    """

    def __init__(
        self,
        analysis: PropAnalysis,
        group: CheckboxGroup,
        *,
        delay_ms: int = DEFAULT_DELAY_MS,
        timer_factory: TimerFactory = _thread_timer,
    ) -> None:
        self.analysis = analysis
        self.group = group
        self.query = ""
        self.debounced_query = ""
        self._results: Optional[List[PropValueDistribution]] = None
        self._debouncer = Debouncer(self._apply_query, delay_ms, timer_factory)

    def set_query(self, value: str) -> None:
        self.query = value
        self._debouncer(value)

    def clear(self) -> None:
        self._debouncer.cancel()
        self.query = ""
        self._apply_query("")

    def flush(self) -> None:
        self._debouncer.flush()

    @property
    def has_query(self) -> bool:
        return bool(self.query.strip())

    @property
    def is_searching(self) -> bool:
        return self.query != self.debounced_query

    def results(self) -> List[PropValueDistribution]:
        if self._results is None:
            needle = self.debounced_query.lower().strip()
            if not needle:
                self._results = list(self.analysis.values)
            else:
                self._results = [
                    item for item in self.analysis.values if needle in item.value.lower()
                ]
        return self._results

    def result_count(self) -> int:
        return len(self.results())

    def are_all_results_checked(self) -> bool:
        results = self.results()
        if not results:
            return False
        return all(self.group.is_selected(item.value) for item in results)

    def is_filtering_by_results(self) -> bool:
        """True when the checked set is exactly the current (partial) result list."""
        if not self.group.is_filtered():
            return False
        return (
            self.group.checked_count() == self.result_count()
            and self.are_all_results_checked()
        )

    def select_results(self) -> None:
        """Check only the results, or restore every value if that is already the case."""
        if self.is_filtering_by_results():
            self.group.select_all()
        else:
            self.group.select_only_many(item.value for item in self.results())

    def _apply_query(self, value: str) -> None:
        self.debounced_query = value
        self._results = None
