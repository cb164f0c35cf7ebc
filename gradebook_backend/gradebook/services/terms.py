import re
from dataclasses import dataclass
from enum import Enum


class Season(str, Enum):
    SPRING = "Spring"
    SUMMER = "Summer"
    FALL = "Fall"
    WINTER = "Winter"
    UNKNOWN = "Unknown"


# Order within a calendar year.
TERM_ORDER = {
    Season.SPRING: 1,
    Season.SUMMER: 2,
    Season.FALL: 3,
    Season.WINTER: 4,
    Season.UNKNOWN: 5,
}

_YEAR_RE = re.compile(r"\d{4}")


@dataclass(frozen=True)
class TermInfo:
    season: Season
    year: int  # 0 when the label carries no year
    order: int

    @property
    def sort_key(self) -> int:
        return self.year * 10 + self.order


def parse_term(name: str | None) -> TermInfo:
    upper = (name or "").upper()
    match = _YEAR_RE.search(upper)
    year = int(match.group(0)) if match else 0

    season = Season.UNKNOWN
    # Checked in this order, so "Spring/Summer" style labels resolve to Spring.
    for candidate in (Season.SPRING, Season.SUMMER, Season.FALL, Season.WINTER):
        if candidate.value.upper() in upper:
            season = candidate
            break
    return TermInfo(season=season, year=year, order=TERM_ORDER[season])


def sort_key(name: str | None) -> int:
    return parse_term(name).sort_key


def academic_year_start(term: TermInfo) -> int:
    """Calendar year in which the term's academic year began (Fall start)."""
    if term.season in (Season.SPRING, Season.SUMMER):
        return term.year - 1
    return term.year


def next_term(season: Season, year: int) -> tuple[Season, int]:
    if season == Season.FALL or season == Season.WINTER:
        return Season.SPRING, year + 1
    # Spring, Summer (and unknown) roll forward into the Fall of the same year.
    return Season.FALL, year


def term_label(season: Season, year: int) -> str:
    return f"{season.value} {year}"
