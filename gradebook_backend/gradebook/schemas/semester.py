from pydantic import BaseModel, Field

from gradebook.models.course import Course
from gradebook.models.semester import Semester


class SemesterCreateRequest(BaseModel):
    name: str | None = None
    raw_text: str | None = None


class SemesterTotalsRequest(BaseModel):
    courses: list[Course]


class SemesterListRequest(BaseModel):
    semesters: list[Semester]


class ForecastRequest(SemesterListRequest):
    # Per-request overrides; omitted values fall back to settings.
    max_periods: int | None = Field(None, ge=0, le=40)
    termination_term: str | None = None
