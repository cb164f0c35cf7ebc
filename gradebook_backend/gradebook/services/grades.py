import math
from types import MappingProxyType
from typing import Iterable

from gradebook.models.course import Course
from gradebook.models.semester import SemesterTotals

GRADE_SCALE = MappingProxyType(
    {
        "A+": 4.0,
        "A": 4.0,
        "A-": 3.67,
        "B+": 3.33,
        "B": 3.0,
        "B-": 2.67,
        "C+": 2.33,
        "C": 2.0,
        "C-": 1.67,
        "D+": 1.33,
        "D": 1.0,
        "D-": 0.67,
        "F": 0.0,
    }
)

# Sentinel grades for courses that have no final grade yet ("" is blank).
IN_PROGRESS_GRADES = frozenset({"", "IP", "TBD", "NG", "PENDING"})


def round2(value: float) -> float:
    """Round half up to two decimals (Python's round() is half-to-even)."""
    return math.floor(value * 100 + 0.5) / 100


def to_credits(value) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        credits = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(credits):
        return 0.0
    return credits


def is_in_progress(grade: str | None) -> bool:
    if grade is None:
        return True
    return grade.strip().upper() in IN_PROGRESS_GRADES


def grade_value(grade: str | None) -> float:
    if not grade:
        return 0.0
    return GRADE_SCALE.get(grade.strip().upper(), 0.0)


def calculate_grade_points(credits, grade: str | None) -> float:
    if is_in_progress(grade):
        return 0.0
    return to_credits(credits) * grade_value(grade)


def should_include_semester(courses: Iterable[Course]) -> bool:
    """All-or-nothing: one in-progress course excludes the whole semester."""
    courses = list(courses)
    if not courses:
        return False
    return all(not is_in_progress(c.grade) for c in courses)


def semester_totals(courses: Iterable[Course]) -> SemesterTotals:
    courses = list(courses)
    total_credits = 0.0
    total_points = 0.0
    for course in courses:
        if is_in_progress(course.grade):
            continue
        total_credits += to_credits(course.credits)
        total_points += to_credits(course.grade_points)

    gpa = round2(total_points / total_credits) if total_credits > 0 else 0.0
    return SemesterTotals(
        total_credits=total_credits,
        total_grade_points=total_points,
        gpa=gpa,
        include_in_overall_gpa=should_include_semester(courses),
    )
