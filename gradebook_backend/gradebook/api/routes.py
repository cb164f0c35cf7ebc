from fastapi import APIRouter, HTTPException

from gradebook.models.forecast import ForecastPoint
from gradebook.models.semester import (
    OverallStats,
    Semester,
    SemesterSection,
    SemesterTotals,
)
from gradebook.schemas.semester import (
    ForecastRequest,
    SemesterCreateRequest,
    SemesterListRequest,
    SemesterTotalsRequest,
)
from gradebook.schemas.transcript import TranscriptParsePreview, TranscriptParseRequest
from gradebook.services.forecast import forecast_gpa
from gradebook.services.grades import semester_totals
from gradebook.services.records import RecordError, create_semester_from_text, overall_stats
from gradebook.services.semesters import organize_semesters
from gradebook.services.transcripts import preview_transcript

router = APIRouter(prefix="/api")


@router.post("/transcripts/parse", response_model=TranscriptParsePreview)
def parse_transcript_endpoint(payload: TranscriptParseRequest):
    return preview_transcript(payload.raw_text)


@router.post("/semesters", response_model=Semester)
def create_semester_endpoint(payload: SemesterCreateRequest):
    try:
        return create_semester_from_text(payload.name, payload.raw_text)
    except RecordError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.post("/semesters/totals", response_model=SemesterTotals)
def semester_totals_endpoint(payload: SemesterTotalsRequest):
    return semester_totals(payload.courses)


@router.post("/semesters/organize", response_model=list[SemesterSection])
def organize_semesters_endpoint(payload: SemesterListRequest):
    return organize_semesters(payload.semesters)


@router.post("/semesters/forecast", response_model=list[ForecastPoint])
def forecast_endpoint(payload: ForecastRequest):
    return forecast_gpa(
        payload.semesters,
        max_periods=payload.max_periods,
        termination_term=payload.termination_term,
    )


@router.post("/semesters/stats", response_model=OverallStats)
def overall_stats_endpoint(payload: SemesterListRequest):
    return overall_stats(payload.semesters)
