"""Record comparator used by list sorting.

Compares two arbitrary records along a dotted field path (``scores.verbal``)
or a typed accessor callable and produces a three-way result (-1, 0, 1).

Ordering rules:
 - ``None`` (or an unresolved path) sorts after any value when ascending and
   before any value when descending, unless ``NullPlacement.ALWAYS_LAST``
 - bools: False < True
 - numbers: numeric order, NaN after every number and tied with other NaNs
 - strings: case-insensitive by default, case-aware on request
 - dates / datetimes: timestamp order
 - mixed types: case-insensitive comparison of their ``str()`` forms

A custom comparator ``fn(a, b, field)`` overrides all of the above; its result
is sign-flipped for descending order.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Union

__all__ = [
    "SortDirection",
    "NullPlacement",
    "Field",
    "CustomCompare",
    "coerce_direction",
    "resolve_path",
    "compare_values",
]

Accessor = Callable[[Any], Any]
Field = Union[str, Accessor]
CustomCompare = Callable[[Any, Any, Field], Any]

_NUMBER_TYPES = (int, float, Decimal)


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class NullPlacement(str, Enum):
    FOLLOW_DIRECTION = "follow_direction"  # last when ascending, first when descending
    ALWAYS_LAST = "always_last"


def coerce_direction(direction: SortDirection | str) -> SortDirection:
    """Return ``direction`` as a ``SortDirection`` (accepts "asc"/"desc")."""
    if isinstance(direction, SortDirection):
        return direction
    try:
        return SortDirection(str(direction).lower())
    except ValueError:
        raise ValueError(f"Unknown sort direction: {direction!r}") from None


def resolve_path(record: Any, path: Field | None) -> Any:
    """Resolve ``path`` against ``record``.

    Mapping steps use key lookup, everything else attribute lookup. Missing
    steps yield ``None``. A callable path is used as an accessor.
    """
    if path is None or path == "":
        return record
    if callable(path):
        return path(record)
    current = record
    for key in path.split("."):
        if current is None:
            return None
        if isinstance(current, Mapping):
            current = current.get(key)
        else:
            current = getattr(current, key, None)
    return current


def _sign(value: Any) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0  # zero or NaN


def _three_way(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _is_nan(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_nan()
    return isinstance(value, float) and math.isnan(value)


def _timestamp(value: date) -> float:
    if isinstance(value, datetime):
        return value.timestamp()
    return datetime.combine(value, time()).timestamp()


def _compare_strings(a: str, b: str, case_sensitive: bool) -> int:
    if case_sensitive:
        # Alphabetical first, case only breaks ties ("apple" near "Apple")
        return _three_way((a.casefold(), a), (b.casefold(), b))
    return _three_way(a.casefold(), b.casefold())


def _natural_compare(a: Any, b: Any, case_sensitive: bool) -> int:
    if isinstance(a, bool) and isinstance(b, bool):
        return _three_way(a, b)
    if (
        isinstance(a, _NUMBER_TYPES)
        and isinstance(b, _NUMBER_TYPES)
        and not isinstance(a, bool)
        and not isinstance(b, bool)
    ):
        a_nan, b_nan = _is_nan(a), _is_nan(b)
        if a_nan or b_nan:
            # Decimal NaN raises on ordering comparisons
            return int(a_nan) - int(b_nan)
        return _three_way(a, b)
    if isinstance(a, str) and isinstance(b, str):
        return _compare_strings(a, b, case_sensitive)
    if isinstance(a, date) and isinstance(b, date):
        return _three_way(_timestamp(a), _timestamp(b))
    return _compare_strings(str(a), str(b), case_sensitive)


def compare_values(
    a: Any,
    b: Any,
    field: Field | None,
    direction: SortDirection | str = SortDirection.ASC,
    custom_fn: CustomCompare | None = None,
    *,
    case_sensitive: bool = False,
    null_placement: NullPlacement = NullPlacement.FOLLOW_DIRECTION,
) -> int:
    """Three-way compare of records ``a`` and ``b`` on ``field``.

    Returns -1, 0 or 1. Exceptions raised by ``custom_fn`` propagate.
    """
    order = coerce_direction(direction)
    descending = order is SortDirection.DESC
    if custom_fn is not None:
        result = _sign(custom_fn(a, b, field))
        return -result if descending else result

    a_value = resolve_path(a, field)
    b_value = resolve_path(b, field)

    if a_value is None:
        if b_value is None:
            return 0
        if null_placement is NullPlacement.ALWAYS_LAST:
            return 1
        return -1 if descending else 1
    if b_value is None:
        if null_placement is NullPlacement.ALWAYS_LAST:
            return -1
        return 1 if descending else -1

    result = _natural_compare(a_value, b_value, case_sensitive)
    return -result if descending else result
