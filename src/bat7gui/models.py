"""GUI-facing candidate result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Tuple

from bat7gui.services.comparator import Field

# BAT-7 aptitude codes and display labels, in battery order
BAT7_APTITUDES: Tuple[Tuple[str, str], ...] = (
    ("V", "Verbal"),
    ("E", "Spatial"),
    ("A", "Attention"),
    ("R", "Reasoning"),
    ("N", "Numerical"),
    ("M", "Mechanical"),
    ("O", "Spelling"),
)


@dataclass
class CandidateResultEntry:
    """One candidate's row in a results list.

    ``scores`` maps aptitude code to percentile; a missing or ``None`` score
    means the sub-test has not been taken yet.
    """

    candidate_id: str
    full_name: str
    document_id: str
    institution: str | None = None
    test_date: Optional[date] = None
    scores: Dict[str, Optional[int]] = field(default_factory=dict)
    completed: bool = False

    @property
    def id(self) -> str:
        return self.candidate_id

    def mean_percentile(self) -> Optional[float]:
        taken = [v for v in self.scores.values() if v is not None]
        if not taken:
            return None
        return sum(taken) / len(taken)


@dataclass
class CandidateColumn:
    """Table column bound to a sortable field path or accessor."""

    title: str
    field: Field


def candidate_columns() -> List[CandidateColumn]:
    cols = [
        CandidateColumn("Name", "full_name"),
        CandidateColumn("Document", "document_id"),
        CandidateColumn("Institution", "institution"),
        CandidateColumn("Date", "test_date"),
    ]
    cols.extend(CandidateColumn(code, f"scores.{code}") for code, _ in BAT7_APTITUDES)
    cols.append(CandidateColumn("Mean", CandidateResultEntry.mean_percentile))
    cols.append(CandidateColumn("Done", "completed"))
    return cols


__all__ = ["BAT7_APTITUDES", "CandidateResultEntry", "CandidateColumn", "candidate_columns"]
