"""Sort state management for list and table views.

``SortState`` holds either a single active sort field (single-column mode) or
an ordered list of ``SortCriterion`` entries applied as a tie-break chain
(multi-column mode). ``derive`` returns a sorted copy of a collection; the
input is never mutated and ties keep their original relative order.

Usage:
    state = SortState(multi_sort=True)
    state.add_criterion("scores.R", "desc")
    state.add_criterion("full_name")
    rows_sorted = state.derive(rows)

Re-adding a criterion for a field that is already present replaces it and
moves it to the end of the chain (lowest priority).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key
from typing import Any, List, Optional, Tuple

from .comparator import (
    CustomCompare,
    Field,
    NullPlacement,
    SortDirection,
    coerce_direction,
    compare_values,
)
from .event_bus import EventBus, GUIEvent

__all__ = ["SortCriterion", "SortIcon", "SortState", "field_label"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SortCriterion:
    field: Field
    direction: SortDirection = SortDirection.ASC
    custom_fn: Optional[CustomCompare] = None


class SortIcon(str, Enum):
    NONE = "sort"
    ASCENDING = "sort-asc"
    DESCENDING = "sort-desc"


def field_label(field: Field) -> str:
    if isinstance(field, str):
        return field
    return getattr(field, "__name__", repr(field))


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


class SortState:
    """Sort criteria owned by a single view.

    Parameters
    ----------
    initial_sort_by / initial_sort_order:
        Optional criterion active on creation and restored by ``reset``.
    multi_sort:
        Enables the ordered criteria list (tie-break chain).
    case_sensitive:
        Case-aware string ordering instead of the case-insensitive default.
    custom_compare:
        Comparator ``fn(a, b, field)`` used for single sorts and carried by
        ``set_single_sort`` into the criteria list.
    null_placement:
        Where ``None`` values land, see ``NullPlacement``.
    event_bus:
        Receives ``GUIEvent.SORT_CHANGED`` after every state change.
    """

    def __init__(
        self,
        *,
        initial_sort_by: Field | None = None,
        initial_sort_order: SortDirection | str = SortDirection.ASC,
        multi_sort: bool = False,
        case_sensitive: bool = False,
        custom_compare: CustomCompare | None = None,
        null_placement: NullPlacement = NullPlacement.FOLLOW_DIRECTION,
        event_bus: EventBus | None = None,
    ) -> None:
        self._initial_sort_by = initial_sort_by
        self._initial_sort_order = coerce_direction(initial_sort_order)
        self.multi_sort = multi_sort
        self._case_sensitive = bool(case_sensitive)
        self._null_placement = NullPlacement(null_placement)
        self._custom_compare = custom_compare
        self._event_bus = event_bus
        self._sort_by: Field | None = initial_sort_by
        self._sort_order: SortDirection = self._initial_sort_order
        self._criteria: List[SortCriterion] = []
        self._revision = 0

    # State ------------------------------------------------------------
    @property
    def sort_by(self) -> Field | None:
        return self._sort_by

    @property
    def sort_order(self) -> SortDirection:
        return self._sort_order

    @property
    def case_sensitive(self) -> bool:
        return self._case_sensitive

    @case_sensitive.setter
    def case_sensitive(self, value: bool) -> None:
        if bool(value) != self._case_sensitive:
            self._case_sensitive = bool(value)
            self._changed()

    @property
    def null_placement(self) -> NullPlacement:
        return self._null_placement

    @null_placement.setter
    def null_placement(self, value: NullPlacement) -> None:
        placement = NullPlacement(value)
        if placement is not self._null_placement:
            self._null_placement = placement
            self._changed()

    @property
    def criteria(self) -> Tuple[SortCriterion, ...]:
        return tuple(self._criteria)

    @property
    def revision(self) -> int:
        """Counter bumped on every change; usable as a memoization key."""
        return self._revision

    @property
    def has_sorting(self) -> bool:
        return bool(self._chain())

    @property
    def sort_count(self) -> int:
        return len(self._chain())

    # Mutations --------------------------------------------------------
    def set_single_sort(self, field: Field, direction: SortDirection | str = SortDirection.ASC) -> None:
        order = coerce_direction(direction)
        self._sort_by = field
        self._sort_order = order
        if self.multi_sort:
            self._criteria = [SortCriterion(field, order, self._custom_compare)]
        self._changed()

    def toggle_sort(self, field: Field) -> None:
        if self._sort_by is not None and self._sort_by == field:
            self.set_single_sort(field, self._sort_order.flipped())
        else:
            self.set_single_sort(field, SortDirection.ASC)

    def add_criterion(
        self,
        field: Field,
        direction: SortDirection | str = SortDirection.ASC,
        custom_fn: CustomCompare | None = None,
    ) -> None:
        if not self.multi_sort:
            self.set_single_sort(field, direction)
            return
        order = coerce_direction(direction)
        self._criteria = [c for c in self._criteria if c.field != field]
        self._criteria.append(SortCriterion(field, order, custom_fn))
        self._changed()

    def remove_criterion(self, field: Field) -> None:
        if not self.multi_sort:
            self.clear()
            return
        self._criteria = [c for c in self._criteria if c.field != field]
        if self._sort_by is not None and self._sort_by == field:
            self._sort_by = None
            self._sort_order = SortDirection.ASC
        self._changed()

    def clear(self) -> None:
        self._sort_by = None
        self._sort_order = SortDirection.ASC
        self._criteria = []
        self._changed()

    def reset(self) -> None:
        self._sort_by = self._initial_sort_by
        self._sort_order = self._initial_sort_order
        self._criteria = []
        self._changed()

    # Derivation -------------------------------------------------------
    def derive(self, collection: Any) -> List[Any]:
        """Return a sorted copy of ``collection`` (``[]`` for non-sequences)."""
        if not _is_sequence(collection):
            return []
        rows = list(collection)
        chain = self._chain()
        if not chain or len(rows) < 2:
            return rows

        def _compare(a: Any, b: Any) -> int:
            for c in chain:
                result = compare_values(
                    a,
                    b,
                    c.field,
                    c.direction,
                    c.custom_fn,
                    case_sensitive=self._case_sensitive,
                    null_placement=self._null_placement,
                )
                if result:
                    return result
            return 0

        return sorted(rows, key=cmp_to_key(_compare))

    # Accessors --------------------------------------------------------
    def direction_for(self, field: Field) -> SortDirection | None:
        if self.multi_sort:
            criterion = self._find(field)
            return criterion.direction if criterion else None
        if self._sort_by is not None and self._sort_by == field:
            return self._sort_order
        return None

    def is_sorted(self, field: Field) -> bool:
        return self.direction_for(field) is not None

    def sort_index(self, field: Field) -> int | None:
        """1-based tie-break priority of ``field`` (multi mode only)."""
        if not self.multi_sort:
            return None
        for i, c in enumerate(self._chain()):
            if c.field == field:
                return i + 1
        return None

    def sort_icon(self, field: Field) -> SortIcon:
        direction = self.direction_for(field)
        if direction is None:
            return SortIcon.NONE
        return SortIcon.ASCENDING if direction is SortDirection.ASC else SortIcon.DESCENDING

    # Internal ---------------------------------------------------------
    def _chain(self) -> Tuple[SortCriterion, ...]:
        if self.multi_sort and self._criteria:
            return tuple(self._criteria)
        if self._sort_by is not None:
            return (SortCriterion(self._sort_by, self._sort_order, self._custom_compare),)
        return ()

    def _find(self, field: Field) -> SortCriterion | None:
        return next((c for c in self._chain() if c.field == field), None)

    def _changed(self) -> None:
        self._revision += 1
        summary = [(field_label(c.field), c.direction.value) for c in self._chain()]
        logger.debug("Sort state changed: %s", summary or "none")
        if self._event_bus is not None:
            self._event_bus.publish(GUIEvent.SORT_CHANGED, {"criteria": summary})
