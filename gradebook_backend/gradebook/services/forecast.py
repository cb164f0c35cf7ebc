"""Cumulative GPA series and damped-trend (Holt) forecast.

The model is fit on the cumulative GPA of every semester up to the last one
that counts toward the overall GPA. Semesters after that boundary, and a run
of synthetic future terms, receive projected values:

    level_t = ALPHA * y_t + (1 - ALPHA) * (level_{t-1} + PHI * trend_{t-1})
    trend_t = BETA * (level_t - level_{t-1}) + (1 - BETA) * PHI * trend_{t-1}
    yhat_h  = level + PHI * (1 - PHI**h) / (1 - PHI) * trend

The projected series starts at the boundary with the actual cumulative GPA so
the two lines meet.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from gradebook.core.config import settings
from gradebook.models.forecast import ForecastPoint
from gradebook.models.semester import Semester
from gradebook.services.grades import round2, to_credits
from gradebook.services.semesters import (
    ACADEMIC_LABELS,
    find_anchor,
    sort_chronologically,
    year_level_for,
)
from gradebook.services.terms import (
    TERM_ORDER,
    Season,
    next_term,
    parse_term,
    term_label,
)

logger = logging.getLogger(__name__)

ALPHA = 0.6
BETA = 0.05
PHI = 0.7

MIN_GPA = 0.0
MAX_GPA = 4.0

YEAR_LEVELS = ACADEMIC_LABELS[:4]
FINAL_YEAR_LEVEL = YEAR_LEVELS[-1]


@dataclass(frozen=True)
class HoltState:
    level: float
    trend: float

    def project(self, horizon: int) -> float:
        damped = _damped_sum(horizon)
        value = round2(self.level + PHI * damped * self.trend)
        return min(MAX_GPA, max(MIN_GPA, value))


def _damped_sum(horizon: int) -> float:
    if PHI == 1:
        return float(horizon)
    return (1 - PHI**horizon) / (1 - PHI)


def fit_damped_trend(values: Iterable[float]) -> HoltState | None:
    observations = list(values)
    if not observations:
        return None

    level = observations[0]
    trend = observations[1] - observations[0] if len(observations) >= 2 else 0.0
    for y in observations[1:]:
        previous = level
        level = ALPHA * y + (1 - ALPHA) * (previous + PHI * trend)
        trend = BETA * (level - previous) + (1 - BETA) * PHI * trend
    return HoltState(level=level, trend=trend)


def cumulative_series(semesters: Iterable[Semester]) -> list[ForecastPoint]:
    """Historical points in chronological order, without projections."""
    detailed = sort_chronologically(semesters)
    anchor = find_anchor(term for _, term in detailed)

    points: list[ForecastPoint] = []
    running_credits = 0.0
    running_points = 0.0
    level = YEAR_LEVELS[0]
    for semester, term in detailed:
        if semester.include_in_overall_gpa:
            running_credits += to_credits(semester.total_credits)
            running_points += to_credits(semester.total_grade_points)
        cumulative = round2(running_points / running_credits) if running_credits > 0 else None
        level = year_level_for(semester.name, anchor, max_index=len(YEAR_LEVELS) - 1) or level
        points.append(
            ForecastPoint(
                term=semester.name,
                year_level=level,
                gpa=semester.gpa if semester.include_in_overall_gpa else None,
                cumulative_gpa=cumulative,
                sort_key=term.sort_key,
            )
        )
    return points


def forecast_gpa(
    semesters: Iterable[Semester],
    *,
    max_periods: int | None = None,
    termination_term: str | None = None,
) -> list[ForecastPoint]:
    points = cumulative_series(semesters)
    if not points:
        return []

    last_completed = -1
    for index, point in enumerate(points):
        if point.gpa is not None:
            last_completed = index
    if last_completed < 0:
        logger.debug("No completed semesters; forecast is empty")
        return points

    observed = [p.cumulative_gpa for p in points[: last_completed + 1] if p.cumulative_gpa is not None]
    model = fit_damped_trend(observed)
    if model is None:
        # Completed semesters carrying zero credits leave nothing to fit.
        return points

    for index, point in enumerate(points):
        if index == last_completed:
            point.projected_gpa = point.cumulative_gpa
        elif index > last_completed:
            point.projected_gpa = model.project(index - last_completed)

    if max_periods is None:
        max_periods = settings.forecast_max_periods
    if termination_term is None:
        termination_term = settings.forecast_termination_term
    points.extend(
        _future_points(points[-1], len(points) - 1 - last_completed, model, max_periods, termination_term)
    )
    return points


def _future_points(
    last: ForecastPoint,
    horizon_offset: int,
    model: HoltState,
    max_periods: int,
    termination_term: str | None,
) -> list[ForecastPoint]:
    last_term = parse_term(last.term)
    if last_term.year == 0:
        return []

    termination = parse_term(termination_term) if termination_term else None
    if termination is not None and termination.year == 0:
        logger.warning("Ignoring forecast termination term without a year: %r", termination_term)
        termination = None

    season, year = last_term.season, last_term.year
    level_index = YEAR_LEVELS.index(last.year_level) if last.year_level in YEAR_LEVELS else 0
    if termination is None and _is_graduating(level_index, season):
        return []

    stop = (termination.year, termination.order) if termination is not None else None
    future: list[ForecastPoint] = []
    for step in range(1, max_periods + 1):
        previous = season
        season, year = next_term(season, year)
        if season == Season.FALL and previous != Season.FALL and level_index < len(YEAR_LEVELS) - 1:
            level_index += 1

        position = (year, TERM_ORDER[season])
        if stop is not None and position > stop:
            break

        future.append(
            ForecastPoint(
                term=term_label(season, year),
                year_level=YEAR_LEVELS[level_index],
                projected_gpa=model.project(horizon_offset + step),
                sort_key=year * 10 + TERM_ORDER[season],
                is_projection=True,
            )
        )

        if stop is not None:
            if position == stop:
                break
        elif _is_graduating(level_index, season):
            break
    return future


def _is_graduating(level_index: int, season: Season) -> bool:
    return YEAR_LEVELS[level_index] == FINAL_YEAR_LEVEL and season == Season.SPRING
