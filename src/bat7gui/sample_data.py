"""Deterministic sample candidates for the demo window and tests."""

from __future__ import annotations

import random
from datetime import date, timedelta
from typing import List

from .models import BAT7_APTITUDES, CandidateResultEntry

_FIRST = ["Ana", "Luis", "María", "Carlos", "Lucía", "Jorge", "Elena", "Pablo", "Sofía", "Diego"]
_LAST = ["García", "López", "Martínez", "Sánchez", "Pérez", "Gómez", "Ruiz", "Díaz", "Moreno"]
_INSTITUTIONS = ["IES Norte", "Colegio San José", "Academia Central", None]


def generate_candidates(count: int, *, seed: int = 7) -> List[CandidateResultEntry]:
    rng = random.Random(seed)
    start = date(2024, 1, 8)
    out: List[CandidateResultEntry] = []
    for i in range(count):
        taken = rng.randint(0, len(BAT7_APTITUDES))
        scores = {
            code: (rng.randint(1, 99) if n < taken else None)
            for n, (code, _) in enumerate(BAT7_APTITUDES)
        }
        out.append(
            CandidateResultEntry(
                candidate_id=f"C{i + 1:04d}",
                full_name=f"{rng.choice(_FIRST)} {rng.choice(_LAST)}",
                document_id=f"{rng.randint(10_000_000, 99_999_999)}{'TRWAGMYFPD'[i % 10]}",
                institution=rng.choice(_INSTITUTIONS),
                test_date=start + timedelta(days=rng.randint(0, 300)) if taken else None,
                scores=scores,
                completed=taken == len(BAT7_APTITUDES),
            )
        )
    return out
