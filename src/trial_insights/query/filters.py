"""Filter evaluation over participant records"""
from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List

from trial_insights.ingest.schemas import ParticipantRecord, TrialFilters


# criterion attribute on TrialFilters -> value it is compared against on a record
_FIELD_GETTERS: Dict[str, Callable[[ParticipantRecord], Any]] = {
    "center": lambda r: r.randomization.center,
    "gender": lambda r: r.demographics.gender,
    "treatment": lambda r: r.randomization.treatment,
    "age_group": lambda r: r.demographics.age_group,
    "pga_score": lambda r: r.global_assessment.pga_score,
    "itt": lambda r: r.study_populations.itt,
    "pp": lambda r: r.study_populations.pp,
}


def has_adverse_event(record: ParticipantRecord, name: str) -> bool:
    """Exact, case-sensitive match against any of the record's adverse events."""
    return any(event.ae == name for event in record.ae_data)


def matches(record: ParticipantRecord, filters: TrialFilters) -> bool:
    for attr, getter in _FIELD_GETTERS.items():
        wanted = getattr(filters, attr)
        if wanted is not None and getter(record) != wanted:
            return False
    if filters.adverse_event_name is not None:
        return has_adverse_event(record, filters.adverse_event_name)
    return True


def apply_filters(records: Iterable[ParticipantRecord], filters: TrialFilters) -> List[ParticipantRecord]:
    """
    Return the records satisfying every present criterion, in their original order.

    Criteria are ANDed. An empty result is a valid answer.
    """
    return [r for r in records if matches(r, filters)]
