"""ViewModel for the candidate results table.

Holds the raw candidate rows plus the search term and sort state owned by
the view. ``display_rows`` applies the filter and then the sort; the result
is memoized on (rows, search, sort revision). The revision also covers the
comparator options (case sensitivity, null placement).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from bat7gui.models import CandidateResultEntry
from bat7gui.services.event_bus import EventBus, GUIEvent
from bat7gui.services.list_filter import filter_records
from bat7gui.services.render_strategy import RenderStrategy, choose_strategy
from bat7gui.services.settings_service import SettingsService
from bat7gui.services.sort_state import SortState

__all__ = ["CandidateTableViewModel", "CandidateSummary", "SEARCH_FIELDS"]

logger = logging.getLogger(__name__)

SEARCH_FIELDS: Tuple[str, ...] = ("full_name", "document_id", "institution")


@dataclass
class CandidateSummary:
    total: int = 0
    visible: int = 0
    completed: int = 0

    def as_text(self) -> str:
        if self.total == 0:
            return "No candidates"
        text = f"{self.visible} of {self.total} candidates"
        return f"{text} | Completed: {self.completed}"


class CandidateTableViewModel:
    def __init__(
        self,
        sort_state: SortState | None = None,
        *,
        event_bus: EventBus | None = None,
        search_fields: Sequence[str] = SEARCH_FIELDS,
    ):
        prefs = SettingsService.instance
        self.sort_state = sort_state or SortState(
            multi_sort=prefs.multi_sort_enabled,
            case_sensitive=prefs.case_sensitive_sort,
            null_placement=prefs.null_placement,
            event_bus=event_bus,
        )
        self._event_bus = event_bus
        self._search_fields = tuple(search_fields)
        self._raw: List[CandidateResultEntry] = []
        self._search = ""
        self._cache_key: tuple | None = None
        self._cache: List[CandidateResultEntry] = []
        self.summary = CandidateSummary()

    def set_rows(self, rows: Sequence[CandidateResultEntry]) -> None:
        self._raw = list(rows)
        self._cache_key = None
        self._recompute_summary()

    @property
    def search(self) -> str:
        return self._search

    def set_search(self, term: str | None) -> None:
        term = (term or "").strip()
        if term == self._search:
            return
        self._search = term
        self._recompute_summary()
        if self._event_bus is not None:
            self._event_bus.publish(GUIEvent.FILTER_CHANGED, {"term": term})

    def filtered_rows(self) -> List[CandidateResultEntry]:
        return filter_records(self._raw, self._search, self._search_fields)

    def display_rows(self) -> List[CandidateResultEntry]:
        """Filtered then sorted rows.

        Exceptions from custom comparators propagate to the caller.
        """
        key = (id(self._raw), len(self._raw), self._search, self.sort_state.revision)
        if key != self._cache_key:
            self._cache = self.sort_state.derive(self.filtered_rows())
            self._cache_key = key
            logger.debug("Derived %d display rows", len(self._cache))
        return list(self._cache)

    def render_strategy(self, threshold: Optional[int] = None) -> RenderStrategy:
        if threshold is None:
            threshold = SettingsService.instance.virtualization_threshold
        return choose_strategy(self.summary.visible, threshold)

    def _recompute_summary(self) -> None:
        visible = len(self.filtered_rows())
        self.summary = CandidateSummary(
            total=len(self._raw),
            visible=visible,
            completed=sum(1 for r in self._raw if r.completed),
        )
