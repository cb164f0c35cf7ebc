"""Group semesters into chronological display sections.

Fall and Spring terms are bucketed by academic year (Freshman, Sophomore,
...). Each Summer term gets its own section, slotted between the academic
year that ends that Spring and the one that starts that Fall:

    Freshman (Fall 2023, Spring 2024) -> Summer 2024 -> Sophomore (Fall 2024)

Winter, unrecognised and undated labels collect in a trailing "Miscellaneous"
section.
"""

import logging
import math
from typing import Iterable

from gradebook.models.semester import Semester, SemesterSection
from gradebook.services.terms import (
    TERM_ORDER,
    Season,
    TermInfo,
    academic_year_start,
    parse_term,
)

logger = logging.getLogger(__name__)

ACADEMIC_LABELS = (
    "Freshman",
    "Sophomore",
    "Junior",
    "Senior",
    "Graduate I",
    "Graduate II",
)
MISC_LABEL = "Miscellaneous"

_ACADEMIC_SEASONS = (Season.FALL, Season.SPRING)
_LABELLED_SEASONS = (Season.FALL, Season.SPRING, Season.SUMMER)


def academic_label(index: int) -> str:
    if 0 <= index < len(ACADEMIC_LABELS):
        return ACADEMIC_LABELS[index]
    return f"Year {index + 1}"


def sort_chronologically(semesters: Iterable[Semester]) -> list[tuple[Semester, TermInfo]]:
    detailed = [(sem, parse_term(sem.name)) for sem in semesters]
    detailed.sort(key=lambda pair: (pair[1].year, pair[1].order))
    return detailed


def find_anchor(terms: Iterable[TermInfo]) -> int | None:
    """Start year of the first academic year, from the earliest dated term.

    A Fall term opens its own academic year; any other season belongs to the
    year that opened the previous Fall. Labels without a year are skipped.
    """
    for term in terms:
        if term.year == 0:
            continue
        if term.season == Season.FALL:
            return term.year
        return term.year - 1
    return None


def year_level_for(name: str | None, anchor: int | None, max_index: int | None = None) -> str | None:
    """Academic-year label of a term counted from the anchor year.

    Returns None for Winter, unrecognised and undated terms. Summer belongs to
    the academic year that started the previous Fall. When max_index is given
    the position is clamped to [0, max_index].
    """
    term = parse_term(name)
    if anchor is None or term.year == 0 or term.season not in _LABELLED_SEASONS:
        return None
    index = academic_year_start(term) - anchor
    if max_index is not None:
        index = min(max(index, 0), max_index)
    return academic_label(index)


def organize_semesters(semesters: Iterable[Semester]) -> list[SemesterSection]:
    detailed = sort_chronologically(semesters)
    if not detailed:
        return []

    anchor = find_anchor(term for _, term in detailed)
    sections: list[SemesterSection] = []
    academic_years: dict[int, SemesterSection] = {}
    last_term: dict[int, TermInfo] = {}
    misc: SemesterSection | None = None

    for semester, term in detailed:
        semester = semester.model_copy(deep=True)
        dated = term.year != 0

        if dated and term.season == Season.SUMMER:
            sections.append(
                SemesterSection(
                    label=f"Summer {term.year}",
                    semesters=[semester],
                    sort_year=term.year,
                    sort_term_order=TERM_ORDER[Season.SUMMER],
                )
            )
        elif dated and term.season in _ACADEMIC_SEASONS:
            start = academic_year_start(term)
            group = academic_years.get(start)
            if group is None:
                group = SemesterSection(
                    label=year_level_for(semester.name, anchor),
                    semesters=[],
                    sort_year=start,
                    sort_term_order=term.order,
                )
                academic_years[start] = group
                sections.append(group)
            group.semesters.append(semester)
            last_term[start] = term
        else:
            if misc is None:
                misc = SemesterSection(
                    label=MISC_LABEL,
                    semesters=[],
                    sort_year=math.inf,
                    sort_term_order=TERM_ORDER[Season.UNKNOWN],
                )
                sections.append(misc)
            misc.semesters.append(semester)

    # A year ending in Spring sorts as that Spring, ahead of the same year's Summer.
    for start, group in academic_years.items():
        term = last_term[start]
        if term.season == Season.SPRING:
            group.sort_year = term.year
            group.sort_term_order = TERM_ORDER[Season.SPRING]

    sections.sort(key=lambda s: (s.sort_year, s.sort_term_order))
    logger.debug("Organized %d semesters into %d sections", len(detailed), len(sections))
    return sections
