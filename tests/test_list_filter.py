from dataclasses import dataclass

from bat7gui.services.list_filter import filter_records


@dataclass
class Person:
    name: str
    city: str | None = None


ROWS = [
    {"name": "Ana García", "meta": {"school": "IES Norte"}},
    {"name": "Luis Pérez", "meta": {"school": "Colegio San José"}},
    {"name": "Elena Ruiz", "meta": {"school": None}},
]


def test_blank_term_returns_copy():
    out = filter_records(ROWS, "   ")
    assert out == ROWS and out is not ROWS


def test_case_insensitive_all_values():
    assert [r["name"] for r in filter_records(ROWS, "ana")] == ["Ana García"]


def test_explicit_dotted_fields():
    out = filter_records(ROWS, "norte", ["meta.school"])
    assert [r["name"] for r in out] == ["Ana García"]
    assert filter_records(ROWS, "norte", ["name"]) == []


def test_dataclass_records():
    people = [Person("Ana", "Madrid"), Person("Luis", None)]
    assert filter_records(people, "madrid") == [people[0]]


def test_non_sequence_input():
    assert filter_records(None, "x") == []
    assert filter_records("abc", "a") == []
