"""Distinct values used to populate filter controls"""
from __future__ import annotations

from typing import Iterable, List

from trial_insights.ingest.schemas import ParticipantRecord


def center_options(records: Iterable[ParticipantRecord]) -> List[str]:
    return sorted({r.randomization.center for r in records})


def gender_options(records: Iterable[ParticipantRecord]) -> List[str]:
    return sorted({r.demographics.gender for r in records})


def treatment_options(records: Iterable[ParticipantRecord]) -> List[str]:
    return sorted({r.randomization.treatment for r in records})


def age_group_options(records: Iterable[ParticipantRecord]) -> List[str]:
    return sorted({r.demographics.age_group for r in records})


def adverse_event_options(records: Iterable[ParticipantRecord]) -> List[str]:
    return sorted({event.ae for r in records for event in r.ae_data})


def pga_score_options(records: Iterable[ParticipantRecord]) -> List[int]:
    return sorted({r.global_assessment.pga_score for r in records})
