"""Assemble summary prompts for a cohort or a single patient and run them"""
from __future__ import annotations

import json
import logging
from typing import Literal, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from trial_insights.config import SETTINGS
from trial_insights.ingest.schemas import ParticipantRecord, TrialFilters
from trial_insights.ingest.store import RecordStore
from trial_insights.llm.client import SummarizationService
from trial_insights.llm.prompts import COHORT_SUMMARY_PROMPT, PATIENT_SUMMARY_PROMPT, render
from trial_insights.query.filters import apply_filters

logger = logging.getLogger(__name__)

NO_FILTERS_TEXT = "No filters applied. Summarizing dataset for the current study."
PATIENT_NOT_FOUND = "Error: Patient not found."
EMPTY_OUTPUT = "Error: AI failed to generate a summary."
UPSTREAM_EXCEPTION = "Error: An exception occurred while generating the AI summary."

FILTER_LABELS = {
    "center": "Trial Center",
    "gender": "Gender",
    "treatment": "Treatment",
    "ageGroup": "Age Group",
    "pgaScore": "PGA Score",
    "adverseEventName": "Adverse Event",
    "itt": "ITT Population",
    "pp": "PP Population",
}

SummaryStatus = Literal["ok", "not_found", "upstream_error"]


class SummaryRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    filters: Optional[TrialFilters] = None
    patient_id: Optional[str] = Field(default=None, alias="patientId")
    study_id: Optional[str] = Field(default=None, alias="studyId")


class SummaryResult(BaseModel):
    status: SummaryStatus
    summary: str

    @property
    def ok(self) -> bool:
        return self.status == "ok"


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    return str(value)


def describe_filters(filters: Optional[TrialFilters]) -> str:
    """
    Human-readable list of active filters.

    Returns NO_FILTERS_TEXT when nothing constrains the dataset, otherwise
    a header line followed by one "  - Label: value" line per criterion.
    """
    active = filters.active() if filters is not None else {}
    if not active:
        return NO_FILTERS_TEXT
    lines = ["Filters Applied to Dataset:"]
    for key, value in active.items():
        lines.append(f"  - {FILTER_LABELS.get(key, key)}: {_format_value(value)}")
    return "\n".join(lines)


def build_patient_prompt(
    patient: ParticipantRecord,
    filters: Optional[TrialFilters] = None,
    study_id: Optional[str] = None,
) -> str:
    context = f"Summarizing specific patient: {patient.patient_id}."
    if filters is not None and not filters.is_empty():
        context += f" Current dashboard filters for context: {json.dumps(filters.active(), indent=2)}"
    else:
        context += " No additional dashboard filters active."

    return render(
        PATIENT_SUMMARY_PROMPT,
        study_context=f"Study ID: {study_id}" if study_id else None,
        patient_data=json.dumps(patient.to_json_dict(), indent=2),
        filters_applied=context,
    )


def build_cohort_prompt(
    records: Sequence[ParticipantRecord],
    filters: Optional[TrialFilters] = None,
    study_id: Optional[str] = None,
    max_records: Optional[int] = None,
) -> str:
    limit = max_records if max_records is not None else SETTINGS.summary_max_records
    sample = list(records[:limit])
    return render(
        COHORT_SUMMARY_PROMPT,
        study_context=f"Study ID: {study_id}" if study_id else None,
        filters_applied=describe_filters(filters),
        shown=len(sample),
        total=len(records),
        trial_data=json.dumps([r.to_json_dict() for r in sample], indent=2),
    )


def summarize_insights(
    request: SummaryRequest,
    store: RecordStore,
    llm: SummarizationService,
    *,
    max_records: Optional[int] = None,
) -> SummaryResult:
    if request.patient_id:
        patient = store.get_patient(request.patient_id)
        if patient is None:
            logger.info(f"Summary requested for unknown patient {request.patient_id}")
            return SummaryResult(status="not_found", summary=PATIENT_NOT_FOUND)
        prompt = build_patient_prompt(patient, request.filters, request.study_id)
        logger.info(f"Summarizing patient {patient.patient_id}")
    else:
        records = apply_filters(store.all(), request.filters or TrialFilters())
        prompt = build_cohort_prompt(records, request.filters, request.study_id, max_records)
        logger.info(f"Summarizing cohort of {len(records)} records")

    try:
        text = llm.generate(prompt)
    except Exception:
        logger.exception("Summarization service call failed")
        return SummaryResult(status="upstream_error", summary=UPSTREAM_EXCEPTION)

    if not text or not text.strip():
        return SummaryResult(status="upstream_error", summary=EMPTY_OUTPUT)
    return SummaryResult(status="ok", summary=text)
