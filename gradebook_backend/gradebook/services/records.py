"""Semester record operations a host runs on every edit.

Each function returns a new Semester with totals recomputed; inputs are never
mutated. Validation failures raise RecordError subclasses so the caller can
surface them before anything is stored.
"""

import logging
import math
from typing import Iterable
from uuid import uuid4

from gradebook.models.course import Course
from gradebook.models.semester import OverallStats, Semester
from gradebook.services.grades import (
    calculate_grade_points,
    round2,
    semester_totals,
    to_credits,
)
from gradebook.services.transcript_parser import parse_course_data

logger = logging.getLogger(__name__)

DEFAULT_SEMESTER_NAME = "New Semester"
EDITABLE_FIELDS = ("code", "title", "grade", "credits")


class RecordError(ValueError):
    pass


class InvalidCourseEdit(RecordError):
    pass


class CourseParseError(RecordError):
    pass


def build_semester(
    name: str | None,
    courses: Iterable[Course] = (),
    semester_id: str | None = None,
) -> Semester:
    courses = [c.model_copy(deep=True) for c in courses]
    totals = semester_totals(courses)
    return Semester(
        id=semester_id or uuid4().hex,
        name=(name or "").strip() or DEFAULT_SEMESTER_NAME,
        courses=courses,
        total_credits=totals.total_credits,
        total_grade_points=totals.total_grade_points,
        gpa=totals.gpa,
        include_in_overall_gpa=totals.include_in_overall_gpa,
    )


def create_semester_from_text(name: str | None, raw_text: str | None) -> Semester:
    if not raw_text or not raw_text.strip():
        return build_semester(name)
    courses = parse_course_data(raw_text)
    if not courses:
        raise CourseParseError("Could not parse any valid courses from the input.")
    return build_semester(name, courses)


def _with_courses(semester: Semester, courses: list[Course]) -> Semester:
    return build_semester(semester.name, courses, semester_id=semester.id)


def recalculate(semester: Semester) -> Semester:
    courses = []
    for course in semester.courses:
        course = course.model_copy(deep=True)
        course.grade_points = calculate_grade_points(course.credits, course.grade)
        courses.append(course)
    return _with_courses(semester, courses)


def add_courses(semester: Semester, courses: Iterable[Course]) -> Semester:
    return _with_courses(semester, [*semester.courses, *courses])


def add_courses_from_text(semester: Semester, raw_text: str) -> Semester:
    courses = parse_course_data(raw_text)
    if not courses:
        raise CourseParseError("Could not parse any valid courses from the input.")
    return add_courses(semester, courses)


def remove_course(semester: Semester, index: int) -> Semester:
    if not 0 <= index < len(semester.courses):
        raise RecordError(f"No course at position {index}.")
    courses = list(semester.courses)
    del courses[index]
    return _with_courses(semester, courses)


def rename_semester(semester: Semester, name: str | None) -> Semester:
    renamed = semester.model_copy(deep=True)
    if name and name.strip():
        renamed.name = name.strip()
    return renamed


def parse_credits(value) -> float:
    if not _looks_numeric(value) or float(value) < 0:
        raise InvalidCourseEdit("Credits must be a positive number.")
    return float(value)


def _looks_numeric(value) -> bool:
    if isinstance(value, bool) or value is None:
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def update_course_field(semester: Semester, index: int, field: str, value) -> Semester:
    if field not in EDITABLE_FIELDS:
        raise InvalidCourseEdit(f"Unknown course field: {field}")
    if not 0 <= index < len(semester.courses):
        raise RecordError(f"No course at position {index}.")

    courses = [c.model_copy(deep=True) for c in semester.courses]
    course = courses[index]
    if field == "credits":
        course.credits = parse_credits(value)
    elif field == "grade":
        course.grade = str(value or "").strip().upper()
    else:
        setattr(course, field, str(value or ""))
    course.grade_points = calculate_grade_points(course.credits, course.grade)
    logger.debug("Updated %s of course %s in semester %s", field, course.uid, semester.id)
    return _with_courses(semester, courses)


def overall_stats(semesters: Iterable[Semester]) -> OverallStats:
    semesters = list(semesters)
    included = [s for s in semesters if s.include_in_overall_gpa]
    total_credits = sum(to_credits(s.total_credits) for s in included)
    total_points = sum(to_credits(s.total_grade_points) for s in included)
    return OverallStats(
        total_credits=total_credits,
        total_grade_points=total_points,
        overall_gpa=round2(total_points / total_credits) if total_credits > 0 else 0.0,
        semester_count=len(semesters),
        included_semester_count=len(included),
    )
