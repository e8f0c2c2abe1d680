"""FastAPI application for the Trial Insights dashboard."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from trial_insights.config import SETTINGS
from trial_insights.ingest.schemas import SCHEMA_VERSION, TrialFilters, VasPeriod
from trial_insights.ingest.store import InMemoryRecordStore, default_store
from trial_insights.llm.client import OllamaClient, SummarizationService
from trial_insights.pipeline.summarize import SummaryRequest, SummaryResult, summarize_insights
from trial_insights.query import options
from trial_insights.query.aggregate import dashboard_stats, filter_vas
from trial_insights.query.filters import apply_filters

logger = logging.getLogger(__name__)

VERSION = "1.0.0"

app = FastAPI(
    title="Trial Insights API",
    description="Filtering, statistics and AI summaries over clinical-trial participant records",
    version=VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Dependencies ===

@lru_cache(maxsize=1)
def get_store() -> InMemoryRecordStore:
    return default_store()


def get_llm() -> SummarizationService:
    return OllamaClient()


def _exact_filters(raw: dict) -> Optional[TrialFilters]:
    """
    Build filters from parsed query values.

    Returns None when a value lies outside its field's domain: matching is
    exact, so no record can satisfy such a criterion.
    """
    present = {k: v for k, v in raw.items() if v is not None and v != ""}
    try:
        return TrialFilters.model_validate(present)
    except ValidationError:
        logger.debug(f"Filter value outside its domain, nothing can match: {present}")
        return None


def filters_from_query(
    center: Optional[str] = None,
    gender: Optional[str] = None,
    treatment: Optional[str] = None,
    age_group: Optional[str] = Query(None, alias="ageGroup"),
    pga_score: Optional[str] = Query(None, alias="pgaScore"),
    adverse_event_name: Optional[str] = Query(None, alias="adverseEventName"),
    itt: Optional[str] = None,
    pp: Optional[str] = None,
) -> Optional[TrialFilters]:
    # an unparseable score is dropped, not treated as a criterion
    pga: Optional[int] = None
    if pga_score:
        try:
            pga = int(pga_score)
        except ValueError:
            pga = None
    return _exact_filters({
        "center": center,
        "gender": gender,
        "treatment": treatment,
        "ageGroup": age_group,
        "pgaScore": pga,
        "adverseEventName": adverse_event_name,
        "itt": (itt == "true") if itt else None,
        "pp": (pp == "true") if pp else None,
    })


# === Error bodies ===

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return JSONResponse(status_code=422, content={"message": f"Invalid request: {problems}"})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


# === Response Models ===

class HealthResponse(BaseModel):
    status: str
    version: str
    schema_version: int
    records: int


# === Endpoints ===

@app.get("/", response_class=HTMLResponse)
async def root():
    """API landing page."""
    return """
    <html>
        <head><title>Trial Insights API</title></head>
        <body style="font-family: sans-serif; max-width: 800px; margin: 50px auto;">
            <h1>Trial Insights API</h1>
            <ul>
                <li><a href="/docs">/docs</a> - Interactive API documentation</li>
                <li><a href="/health">/health</a> - Health check</li>
                <li><a href="/api/trials">/api/trials</a> - Filtered participant records</li>
                <li><a href="/api/stats">/api/stats</a> - Distribution counts</li>
                <li><code>/api/patients/{patientId}</code> - Single participant</li>
                <li><code>POST /api/ai/summarize-insights</code> - AI summary</li>
            </ul>
        </body>
    </html>
    """


@app.get("/health", response_model=HealthResponse)
def health_check(store: InMemoryRecordStore = Depends(get_store)):
    return HealthResponse(
        status="healthy",
        version=VERSION,
        schema_version=SCHEMA_VERSION,
        records=len(store),
    )


@app.get("/api/filters/centers", response_model=List[str])
def get_center_options(store: InMemoryRecordStore = Depends(get_store)):
    return options.center_options(store.all())


@app.get("/api/filters/genders", response_model=List[str])
def get_gender_options(store: InMemoryRecordStore = Depends(get_store)):
    return options.gender_options(store.all())


@app.get("/api/filters/treatments", response_model=List[str])
def get_treatment_options(store: InMemoryRecordStore = Depends(get_store)):
    return options.treatment_options(store.all())


@app.get("/api/filters/age-groups", response_model=List[str])
def get_age_group_options(store: InMemoryRecordStore = Depends(get_store)):
    return options.age_group_options(store.all())


@app.get("/api/filters/adverse-events", response_model=List[str])
def get_adverse_event_options(store: InMemoryRecordStore = Depends(get_store)):
    return options.adverse_event_options(store.all())


@app.get("/api/filters/pga-scores", response_model=List[int])
def get_pga_score_options(store: InMemoryRecordStore = Depends(get_store)):
    return options.pga_score_options(store.all())


@app.get("/api/patients/{patient_id}")
def get_patient(patient_id: str, store: InMemoryRecordStore = Depends(get_store)):
    """
    Get a single participant record.

    Args:
        patient_id: Patient identifier (e.g., P001)
    """
    record = store.get_patient(patient_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Patient not found")
    return record.to_json_dict()


@app.get("/api/patients/{patient_id}/vas")
def get_patient_vas(
    patient_id: str,
    period: VasPeriod = "all",
    store: InMemoryRecordStore = Depends(get_store),
):
    """VAS pain scores for one participant, optionally limited to the last 7/14/30 days."""
    record = store.get_patient(patient_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Patient not found")
    points = filter_vas(record.vas_data, period)
    return [p.model_dump(mode="json", by_alias=True) for p in points]


@app.get("/api/trials")
def get_trials(
    filters: Optional[TrialFilters] = Depends(filters_from_query),
    store: InMemoryRecordStore = Depends(get_store),
):
    """
    Get participant records matching the query parameters.

    A non-numeric pgaScore is ignored; any other value outside its field's
    domain matches no records.
    """
    if filters is None:
        return []
    return [r.to_json_dict() for r in apply_filters(store.all(), filters)]


@app.get("/api/stats")
def get_stats(
    filters: Optional[TrialFilters] = Depends(filters_from_query),
    store: InMemoryRecordStore = Depends(get_store),
):
    if filters is None:
        return dashboard_stats([])
    return dashboard_stats(apply_filters(store.all(), filters))


@app.post("/api/ai/summarize-insights", response_model=SummaryResult)
def post_summarize_insights(
    request: SummaryRequest,
    store: InMemoryRecordStore = Depends(get_store),
    llm: SummarizationService = Depends(get_llm),
):
    """
    Summarize the filtered dataset, or a single patient when patientId is given.

    Failures are reported through `status`; `summary` carries an "Error: ..." text in that case.
    """
    return summarize_insights(request, store, llm)


if __name__ == "__main__":
    import uvicorn
    from trial_insights.logging_conf import setup_logging

    setup_logging(SETTINGS.log_level)
    uvicorn.run(app, host=SETTINGS.api_host, port=SETTINGS.api_port)
