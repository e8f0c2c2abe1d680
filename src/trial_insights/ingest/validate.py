"""Data validation utilities"""
from __future__ import annotations

from typing import Iterable, Set

from trial_insights.errors import DuplicatePatientError

from .schemas import ParticipantRecord


def ensure_unique_ids(records: Iterable[ParticipantRecord]) -> None:
    seen: Set[str] = set()
    for r in records:
        if r.patient_id in seen:
            raise DuplicatePatientError(f"Duplicate patient_id found: {r.patient_id}")
        seen.add(r.patient_id)
