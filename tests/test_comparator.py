from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

import pytest

from bat7gui.services.comparator import (
    NullPlacement,
    SortDirection,
    coerce_direction,
    compare_values,
    resolve_path,
)


@dataclass
class Row:
    name: str
    scores: dict


def test_resolve_nested_mapping_and_attributes():
    rec = {"candidate": {"scores": {"V": 80}}}
    assert resolve_path(rec, "candidate.scores.V") == 80
    assert resolve_path(Row("Ana", {"R": 55}), "scores.R") == 55


def test_resolve_missing_steps_yield_none():
    rec = {"a": {"b": None}}
    assert resolve_path(rec, "a.b.c") is None
    assert resolve_path(rec, "x.y") is None
    assert resolve_path(Row("Ana", {}), "scores.V") is None


def test_resolve_empty_path_and_accessor():
    rec = {"a": 1}
    assert resolve_path(rec, "") is rec
    assert resolve_path(rec, lambda r: r["a"] * 10) == 10


def test_nulls_last_ascending_first_descending():
    a, b = {"s": None}, {"s": 5}
    assert compare_values(a, b, "s", "asc") == 1
    assert compare_values(b, a, "s", "asc") == -1
    assert compare_values(a, b, "s", "desc") == -1
    assert compare_values(a, {"s": None}, "s", "desc") == 0


def test_nulls_always_last_policy():
    a, b = {"s": None}, {"s": 5}
    assert compare_values(a, b, "s", "desc", null_placement=NullPlacement.ALWAYS_LAST) == 1
    assert compare_values(b, a, "s", "desc", null_placement=NullPlacement.ALWAYS_LAST) == -1


def test_numbers_and_direction():
    assert compare_values({"n": 2}, {"n": 10}, "n") == -1
    assert compare_values({"n": 2}, {"n": 10}, "n", SortDirection.DESC) == 1
    assert compare_values({"n": 2.5}, {"n": Decimal("2.5")}, "n") == 0


def test_nan_sorts_after_numbers_without_raising():
    nan_dec, nan_float = {"n": Decimal("NaN")}, {"n": float("nan")}
    assert compare_values(nan_dec, {"n": 5}, "n") == 1
    assert compare_values({"n": Decimal("1.5")}, nan_dec, "n") == -1
    assert compare_values(nan_dec, {"n": 5}, "n", "desc") == -1
    assert compare_values(nan_dec, nan_float, "n") == 0
    assert compare_values(nan_float, {"n": 3}, "n") == 1


def test_strings_case_insensitive_by_default():
    assert compare_values({"s": "apple"}, {"s": "Banana"}, "s") == -1
    assert compare_values({"s": "ABC"}, {"s": "abc"}, "s") == 0


def test_strings_case_sensitive_breaks_ties():
    assert compare_values({"s": "ABC"}, {"s": "abc"}, "s", case_sensitive=True) != 0
    assert compare_values({"s": "apple"}, {"s": "Banana"}, "s", case_sensitive=True) == -1


def test_dates_and_datetimes():
    assert compare_values({"d": date(2024, 1, 1)}, {"d": date(2024, 2, 1)}, "d") == -1
    assert compare_values({"d": datetime(2024, 1, 1, 12)}, {"d": date(2024, 1, 1)}, "d") == 1


def test_booleans_false_before_true_and_not_numbers():
    assert compare_values({"b": False}, {"b": True}, "b") == -1
    # bool vs int is a type mismatch -> string comparison ("1" < "true")
    assert compare_values({"b": True}, {"b": 1}, "b") == 1


def test_mixed_types_fall_back_to_strings():
    assert compare_values({"v": 10}, {"v": "9"}, "v") == -1  # "10" < "9"


def test_custom_comparator_overrides_and_flips():
    calls = []

    def by_len(a, b, field):
        calls.append(field)
        return len(a["s"]) - len(b["s"])

    a, b = {"s": "zz"}, {"s": "aaa"}
    assert compare_values(a, b, "s", "asc", by_len) == -1
    assert compare_values(a, b, "s", "desc", by_len) == 1
    assert calls == ["s", "s"]


def test_custom_comparator_errors_propagate():
    def boom(a, b, field):
        raise RuntimeError("bad compare")

    with pytest.raises(RuntimeError):
        compare_values({}, {}, "x", "asc", boom)


def test_coerce_direction():
    assert coerce_direction("DESC") is SortDirection.DESC
    with pytest.raises(ValueError):
        coerce_direction("sideways")


def test_compare_does_not_mutate_inputs():
    a, b = {"s": {"x": 1}}, {"s": {"x": 2}}
    compare_values(a, b, "s.x")
    assert a == {"s": {"x": 1}} and b == {"s": {"x": 2}}
