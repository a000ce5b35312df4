"""Free-text search over list records.

Case-insensitive substring match either on an explicit list of (dotted)
fields or on every top-level value of a record.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence
from typing import Any, Iterable, List, Optional

from .comparator import Field, resolve_path

__all__ = ["filter_records", "record_values"]


def record_values(record: Any) -> Iterable[Any]:
    """Top-level values of a mapping, dataclass or plain object."""
    if isinstance(record, Mapping):
        return record.values()
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return [getattr(record, f.name) for f in dataclasses.fields(record)]
    if hasattr(record, "__dict__"):
        return vars(record).values()
    return [record]


def _text(value: Any) -> str:
    return "" if value is None else str(value).casefold()


def filter_records(
    records: Any, term: str | None, fields: Optional[Sequence[Field]] = None
) -> List[Any]:
    if not isinstance(records, Sequence) or isinstance(records, (str, bytes)):
        return []
    needle = (term or "").strip().casefold()
    if not needle:
        return list(records)
    out: List[Any] = []
    for record in records:
        if fields:
            values: Iterable[Any] = (resolve_path(record, f) for f in fields)
        else:
            values = record_values(record)
        if any(needle in _text(v) for v in values):
            out.append(record)
    return out
