"""Data schemas for clinical-trial participant records"""
from __future__ import annotations

from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


SCHEMA_VERSION = 2

AgeGroup = Literal["18-30", "31-45", "46-60", "61+", "Unknown"]
Gender = Literal["Male", "Female", "Other"]
Treatment = Literal["Active Drug", "Placebo", "Comparator"]
WorkStatus = Literal["Employed", "Unemployed", "Retired", "Student", "Other"]
AeSeverity = Literal["Mild", "Moderate", "Severe"]
AeRelationship = Literal[
    "Not Related",
    "Unlikely Related",
    "Possibly Related",
    "Probably Related",
    "Related",
]
VasPeriod = Literal["all", "7days", "14days", "30days"]

AGE_GROUP_ORDER: Tuple[str, ...] = ("18-30", "31-45", "46-60", "61+", "Unknown")


class _Frozen(BaseModel):
    # JSON uses the dashboard's camelCase names, Python code uses snake_case
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Demographics(_Frozen):
    age: int = Field(ge=0)
    age_group: AgeGroup = Field(alias="ageGroup")
    gender: Gender
    race: Optional[str] = None
    ethnicity: Optional[str] = None
    height_cm: Optional[float] = Field(default=None, alias="heightCm")
    weight_kg: Optional[float] = Field(default=None, alias="weightKg")


class Randomization(_Frozen):
    center: str
    treatment: Treatment


class StudyPopulations(_Frozen):
    itt: bool
    pp: bool


class GlobalAssessment(_Frozen):
    pga_score: int = Field(alias="pgaScore")
    pga_description: str = Field(alias="pgaDescription")


class BaselineCharacteristics(_Frozen):
    surgery_last_year: bool = Field(alias="surgeryLastYear")
    work_status: WorkStatus = Field(alias="workStatus")


class AdverseEvent(_Frozen):
    ae: str
    ae_severity: AeSeverity = Field(alias="aeSeverity")
    ae_relationship: AeRelationship = Field(alias="aeRelationship")


class VasDataPoint(_Frozen):
    day: int
    vas_score: float = Field(alias="vasScore")


class VitalSigns(_Frozen):
    dbp: Optional[float] = None
    sbp: Optional[float] = None
    pr: Optional[float] = None
    rr: Optional[float] = None


class ParticipantRecord(_Frozen):
    """One trial participant. Sequences are tuples so a record never changes after construction."""
    patient_id: str = Field(alias="patientId", min_length=1)
    demographics: Demographics
    randomization: Randomization
    study_populations: StudyPopulations = Field(alias="studyPopulations")
    global_assessment: GlobalAssessment = Field(alias="globalAssessment")
    baseline_characteristics: BaselineCharacteristics = Field(alias="baselineCharacteristics")
    ae_data: Tuple[AdverseEvent, ...] = Field(default=(), alias="aeData")
    vas_data: Tuple[VasDataPoint, ...] = Field(default=(), alias="vasData")
    vital_signs: VitalSigns = Field(default_factory=VitalSigns, alias="vitalSigns")

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class TrialFilters(_Frozen):
    """Sparse equality criteria. A field left as None puts no constraint on records."""
    center: Optional[str] = None
    gender: Optional[Gender] = None
    treatment: Optional[Treatment] = None
    age_group: Optional[AgeGroup] = Field(default=None, alias="ageGroup")
    pga_score: Optional[int] = Field(default=None, alias="pgaScore")
    adverse_event_name: Optional[str] = Field(default=None, alias="adverseEventName")
    itt: Optional[bool] = None
    pp: Optional[bool] = None

    def active(self) -> dict:
        """Present criteria keyed by their JSON name, in declaration order."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def is_empty(self) -> bool:
        return not self.active()
