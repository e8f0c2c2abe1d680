"""Exceptions raised by Trial Insights"""
from __future__ import annotations


class TrialInsightsError(Exception):
    """Base class for application errors."""


class DuplicatePatientError(TrialInsightsError, ValueError):
    """Raised when a record store is built with a repeated patient_id."""


class PatientNotFoundError(TrialInsightsError, LookupError):
    def __init__(self, patient_id: str):
        super().__init__(f"Patient not found: {patient_id}")
        self.patient_id = patient_id


class SummarizationError(TrialInsightsError):
    """The summarization service failed or could not be reached."""
