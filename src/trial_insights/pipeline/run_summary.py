"""Command-line summary runner

Usage:
    trial-insights-summary                          # whole dataset
    trial-insights-summary --treatment Placebo      # filtered cohort
    trial-insights-summary --patient P001           # single patient
    trial-insights-summary --treatment Placebo --dry-run   # print the prompt only
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from trial_insights.config import SETTINGS
from trial_insights.ingest.schemas import TrialFilters
from trial_insights.ingest.store import InMemoryRecordStore, default_store
from trial_insights.llm.client import OllamaClient
from trial_insights.logging_conf import setup_logging
from trial_insights.pipeline.summarize import (
    SummaryRequest,
    build_cohort_prompt,
    build_patient_prompt,
    summarize_insights,
)
from trial_insights.query.filters import apply_filters


def _bool_arg(value: str) -> bool:
    if value.lower() in ("true", "yes", "1"):
        return True
    if value.lower() in ("false", "no", "0"):
        return False
    raise argparse.ArgumentTypeError(f"expected true/false, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Summarize clinical trial records with an LLM")
    parser.add_argument("--data", type=Path, help="JSON file of participants (defaults to TRIAL_DATA_FILE or the seed data)")
    parser.add_argument("--patient", help="Summarize a single patient by ID")
    parser.add_argument("--study", help="Study ID passed as prompt context")
    parser.add_argument("--center")
    parser.add_argument("--gender")
    parser.add_argument("--treatment")
    parser.add_argument("--age-group")
    parser.add_argument("--pga-score", type=int)
    parser.add_argument("--adverse-event")
    parser.add_argument("--itt", type=_bool_arg)
    parser.add_argument("--pp", type=_bool_arg)
    parser.add_argument("--max-records", type=int, default=SETTINGS.summary_max_records)
    parser.add_argument("--dry-run", action="store_true", help="Print the prompt instead of calling the LLM")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def filters_from_args(args: argparse.Namespace) -> TrialFilters:
    return TrialFilters(
        center=args.center,
        gender=args.gender,
        treatment=args.treatment,
        age_group=args.age_group,
        pga_score=args.pga_score,
        adverse_event_name=args.adverse_event,
        itt=args.itt,
        pp=args.pp,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else SETTINGS.log_level)

    store = InMemoryRecordStore.from_json(args.data) if args.data else default_store()
    try:
        filters = filters_from_args(args)
    except ValidationError as e:
        print(f"Invalid filter: {e}", file=sys.stderr)
        return 2

    if args.dry_run:
        if args.patient:
            patient = store.get_patient(args.patient)
            if patient is None:
                print(f"Patient not found: {args.patient}", file=sys.stderr)
                return 1
            print(build_patient_prompt(patient, filters, args.study))
        else:
            records = apply_filters(store.all(), filters)
            print(build_cohort_prompt(records, filters, args.study, args.max_records))
        return 0

    request = SummaryRequest(filters=filters, patient_id=args.patient, study_id=args.study)
    result = summarize_insights(request, store, OllamaClient(), max_records=args.max_records)
    print(result.summary)
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
