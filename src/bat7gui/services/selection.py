"""Multi-selection tracking for list rows.

Rows are identified by a key: ``key_func(record)`` when supplied, otherwise
the record's ``id`` or ``key`` (mapping entry or attribute).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Hashable, Iterable, List, Optional

from .event_bus import EventBus, GUIEvent

__all__ = ["SelectionModel", "default_record_key"]


def default_record_key(record: Any) -> Hashable:
    for name in ("id", "key"):
        if isinstance(record, Mapping):
            value = record.get(name)
        else:
            value = getattr(record, name, None)
        if value is not None:
            return value
    raise ValueError(f"Record has no 'id' or 'key' to select by: {record!r}")


class SelectionModel:
    def __init__(
        self,
        key_func: Optional[Callable[[Any], Hashable]] = None,
        *,
        event_bus: EventBus | None = None,
    ) -> None:
        self._key = key_func or default_record_key
        self._event_bus = event_bus
        # dict preserves selection order
        self._selected: dict[Hashable, None] = {}

    def select(self, record: Any) -> None:
        key = self._key(record)
        if key not in self._selected:
            self._selected[key] = None
            self._changed()

    def deselect(self, record: Any) -> None:
        key = self._key(record)
        if key in self._selected:
            del self._selected[key]
            self._changed()

    def toggle(self, record: Any) -> bool:
        """Flip selection of ``record``; returns the new selected state."""
        if self.is_selected(record):
            self.deselect(record)
            return False
        self.select(record)
        return True

    def select_all(self, records: Iterable[Any]) -> None:
        self._selected = {self._key(r): None for r in records}
        self._changed()

    def clear(self) -> None:
        self._selected = {}
        self._changed()

    def is_selected(self, record: Any) -> bool:
        return self._key(record) in self._selected

    def selected_keys(self) -> List[Hashable]:
        return list(self._selected)

    def __len__(self) -> int:
        return len(self._selected)

    def _changed(self) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(GUIEvent.SELECTION_CHANGED, {"keys": self.selected_keys()})
