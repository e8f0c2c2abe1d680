"""Distribution counts behind the dashboard charts"""
from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Sequence, Tuple

from trial_insights.ingest.schemas import (
    AGE_GROUP_ORDER,
    ParticipantRecord,
    VasDataPoint,
)

VAS_PERIOD_DAYS = {"7days": 7, "14days": 14, "30days": 30}


def gender_distribution(records: Iterable[ParticipantRecord]) -> Dict[str, int]:
    return dict(Counter(r.demographics.gender for r in records))


def treatment_distribution(records: Iterable[ParticipantRecord]) -> Dict[str, int]:
    return dict(Counter(r.randomization.treatment for r in records))


def age_group_distribution(records: Iterable[ParticipantRecord]) -> Dict[str, int]:
    """Counts in chart order; groups nobody falls into are left out."""
    counts = Counter(r.demographics.age_group for r in records)
    return {group: counts[group] for group in AGE_GROUP_ORDER if counts[group] > 0}


def pga_distribution(records: Iterable[ParticipantRecord]) -> List[Tuple[int, int]]:
    counts = Counter(r.global_assessment.pga_score for r in records)
    return sorted(counts.items())


def adverse_event_frequency(
    records: Iterable[ParticipantRecord], limit: int = 10
) -> List[Tuple[str, int]]:
    """Most frequent adverse events, ties broken alphabetically."""
    counts = Counter(event.ae for r in records for event in r.ae_data)
    ranked = sorted(counts.items(), key=lambda x: (-x[1], x[0]))
    return ranked[:limit]


def dashboard_stats(records: Sequence[ParticipantRecord]) -> dict:
    return {
        "count": len(records),
        "gender": gender_distribution(records),
        "treatment": treatment_distribution(records),
        "age_group": age_group_distribution(records),
        "pga": [{"score": s, "count": c} for s, c in pga_distribution(records)],
        "adverse_events": [{"name": n, "frequency": c} for n, c in adverse_event_frequency(records)],
    }


def filter_vas(points: Sequence[VasDataPoint], period: str = "all") -> List[VasDataPoint]:
    """Keep the VAS points inside the last N days of the series."""
    if period == "all":
        return list(points)
    if period not in VAS_PERIOD_DAYS:
        raise ValueError(f"Unknown VAS period: {period}")
    if not points:
        return []
    last_day = max(p.day for p in points)
    cutoff = last_day - VAS_PERIOD_DAYS[period]
    return [p for p in points if p.day > cutoff]
