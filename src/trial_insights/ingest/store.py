"""Read-only access to participant records"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Protocol, Sequence, Tuple

from trial_insights.config import SETTINGS
from trial_insights.errors import PatientNotFoundError

from .load_files import SEED_FILE, load_participants
from .schemas import ParticipantRecord
from .validate import ensure_unique_ids

logger = logging.getLogger(__name__)


class RecordStore(Protocol):
    def all(self) -> Sequence[ParticipantRecord]: ...

    def get_patient(self, patient_id: str) -> Optional[ParticipantRecord]: ...


class InMemoryRecordStore:
    """Immutable, ordered collection of participants keyed by patient_id."""

    def __init__(self, records: Iterable[ParticipantRecord]):
        records = tuple(records)
        ensure_unique_ids(records)
        self._records: Tuple[ParticipantRecord, ...] = records
        self._by_id = {r.patient_id: r for r in records}

    @classmethod
    def from_json(cls, path: Path) -> "InMemoryRecordStore":
        store = cls(load_participants(path))
        logger.info(f"Loaded {len(store)} participants from {path}")
        return store

    def __len__(self) -> int:
        return len(self._records)

    def all(self) -> Tuple[ParticipantRecord, ...]:
        return self._records

    def get_patient(self, patient_id: str) -> Optional[ParticipantRecord]:
        return self._by_id.get(patient_id)

    def require_patient(self, patient_id: str) -> ParticipantRecord:
        record = self.get_patient(patient_id)
        if record is None:
            raise PatientNotFoundError(patient_id)
        return record


def default_store() -> InMemoryRecordStore:
    """Seed dataset, or the file named by TRIAL_DATA_FILE when it is set."""
    path = Path(SETTINGS.trial_data_file) if SETTINGS.trial_data_file else SEED_FILE
    return InMemoryRecordStore.from_json(path)
