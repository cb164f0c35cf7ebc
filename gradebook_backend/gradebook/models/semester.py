from uuid import uuid4

from pydantic import BaseModel, Field

from gradebook.models.course import Course


class Semester(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    name: str
    courses: list[Course] = []
    total_credits: float = 0.0
    total_grade_points: float = 0.0
    gpa: float = 0.0
    # Only true when every course has a final grade (and there is at least one).
    include_in_overall_gpa: bool = False


class SemesterTotals(BaseModel):
    total_credits: float
    total_grade_points: float
    gpa: float
    include_in_overall_gpa: bool


class SemesterSection(BaseModel):
    """A display grouping of semesters: an academic year, a summer, or the
    trailing "Miscellaneous" bucket."""

    label: str
    semesters: list[Semester] = []
    sort_year: float
    sort_term_order: int


class OverallStats(BaseModel):
    total_credits: float
    total_grade_points: float
    overall_gpa: float
    semester_count: int
    included_semester_count: int
