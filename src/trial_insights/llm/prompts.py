"""Prompt templates for LLM"""
from __future__ import annotations


SYSTEM_PREAMBLE = """
You are an AI assistant specializing in summarizing clinical trial data.
Your summary should be concise and highlight key findings.
"""


STUDY_CONTEXT_BLOCK = """
Current Study Context: {study_context}
"""


PATIENT_SUMMARY_PROMPT = """
Based on the following specific patient data, provide a summary.
Include key demographic characteristics (age, gender, age group), their assigned treatment,
PGA status, notable adverse events (especially severe or related), and any significant
baseline characteristics or vital signs if remarkable.

Patient Data (JSON):
{patient_data}

Contextual Information: {filters_applied}

Provide your summary:
"""


COHORT_SUMMARY_PROMPT = """
Based on the following clinical trial data (which may be a sample of a larger dataset) and
the applied filters, provide a summary of key trends and insights.
Consider:
- Demographic distributions (age groups, gender).
- Treatment group distributions and outcomes if discernible.
- Common or severe adverse events and their relationship to treatment if apparent.
- PGA score trends within the filtered dataset.
- Any notable patterns in baseline characteristics, study populations, VAS scores, or vital signs.

{filters_applied}

Trial Data (JSON array, {shown} of {total} records shown):
{trial_data}

Provide your summary:
"""


def render(body: str, study_context: str | None = None, **fields: object) -> str:
    parts = [SYSTEM_PREAMBLE.strip()]
    if study_context:
        parts.append(STUDY_CONTEXT_BLOCK.format(study_context=study_context).strip())
    parts.append(body.format(**fields).strip())
    return "\n\n".join(parts) + "\n"
