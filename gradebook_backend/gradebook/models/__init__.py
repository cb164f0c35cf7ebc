from gradebook.models.course import Course, new_uid
from gradebook.models.forecast import ForecastPoint
from gradebook.models.semester import (
    OverallStats,
    Semester,
    SemesterSection,
    SemesterTotals,
)

__all__ = [
    "Course",
    "ForecastPoint",
    "OverallStats",
    "Semester",
    "SemesterSection",
    "SemesterTotals",
    "new_uid",
]
