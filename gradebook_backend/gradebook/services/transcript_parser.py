import logging
import re
from dataclasses import dataclass, field
from enum import Enum

from gradebook.models.course import Course, new_uid
from gradebook.services.grades import calculate_grade_points

logger = logging.getLogger(__name__)


def parse_course_data(content: str) -> list[Course]:
    """Parse pasted course text into Course records.

    Supports:
    - Structured transcript dumps (course code, title, then grade/credit columns)
    - Simple 4-line blocks: code, title, grade, credits, separated by blank lines

    Never raises; unrecognisable input yields fewer (or no) courses.
    """
    courses = parse_transcript_text(content or "")
    if courses:
        logger.debug("Parsed %d course(s) in transcript mode", len(courses))
        return courses
    courses = parse_simple_format(content or "")
    logger.debug("Parsed %d course(s) in simple mode", len(courses))
    return courses


def make_blank_course() -> Course:
    return Course(uid=new_uid(), code="", title="", grade="", credits=0.0, grade_points=0.0)


# ── Structured transcript format ─────────────────────────────────────────────

# "ECO2023 (11919)", "CHM2045L", "COP3502"
_COURSE_CODE_RE = re.compile(r"^([A-Z]{2,4}\d{3,4}L?)\s*\(?(\d*)\)?$")
_GRADE_RE = re.compile(r"^[A-F][+-]?$", re.IGNORECASE)
# "3", "4.00"
_CREDITS_RE = re.compile(r"^\d+(\.\d{2})?$")

_SECTION_START_KEYWORDS = ("COURSE (CLASS)", "COURSE TITLE")
_HEADER_KEYWORDS = ("GRADE", "CREDIT ATTEMPTED", "CREDIT EARNED", "CREDIT FOR GPA")
# These can sit between course rows (e.g. a term summary before the next term).
_TERMINATOR_KEYWORDS = ("REQUIREMENT", "TERM GPA", "OVERALL GPA", "UNIVERSITY GPA")


class ParserState(Enum):
    SEEKING_HEADER = "seeking_header"
    SEEKING_COURSE = "seeking_course"
    COLLECTING_TITLE = "collecting_title"
    COLLECTING_GRADE_AND_CREDITS = "collecting_grade_and_credits"


@dataclass
class _CourseDraft:
    code: str
    class_number: str | None = None
    title: str | None = None
    grade: str | None = None
    credits: float | None = None
    pending: list[str] = field(default_factory=list)

    def absorb(self, line: str) -> None:
        self.pending.append(line)
        if self.grade is None:
            for item in self.pending:
                if _GRADE_RE.match(item):
                    self.grade = item.upper()
                    # Drop it so the grade token is never read as credits.
                    self.pending = [p for p in self.pending if p.upper() != self.grade]
                    break
        if self.grade is not None and self.credits is None:
            for item in self.pending:
                if _CREDITS_RE.match(item):
                    self.credits = float(item)
                    break

    def build(self) -> Course | None:
        return _build_course(self.code, self.title, self.grade, self.credits, self.class_number)


def _contains_any(line: str, keywords: tuple[str, ...]) -> bool:
    upper = line.upper()
    return any(keyword in upper for keyword in keywords)


def _contains_all(line: str, keywords: tuple[str, ...]) -> bool:
    upper = line.upper()
    return all(keyword in upper for keyword in keywords)


def _find_course_section(lines: list[str]) -> int | None:
    """Index of the first course row, or None if the text has no course rows."""
    for index, line in enumerate(lines):
        if not _contains_any(line, _SECTION_START_KEYWORDS):
            continue
        next_line = lines[index + 1] if index + 1 < len(lines) else ""
        if _contains_all(line, _HEADER_KEYWORDS):
            return index + 1
        if _contains_all(next_line, _HEADER_KEYWORDS):
            return index + 2
        if "COURSE (CLASS)" in line.upper():
            # Header row is missing; look a little further for the first course.
            for candidate in range(index + 1, len(lines)):
                if _COURSE_CODE_RE.match(lines[candidate]):
                    return candidate
                if _contains_any(lines[candidate], _TERMINATOR_KEYWORDS):
                    break

    for index, line in enumerate(lines):
        if _COURSE_CODE_RE.match(line):
            return index
    return None


def parse_transcript_text(content: str) -> list[Course]:
    lines = [line.strip() for line in content.split("\n")]
    lines = [line for line in lines if line]

    rows: list[Course] = []
    draft: _CourseDraft | None = None
    state = ParserState.SEEKING_HEADER
    index = 0

    def flush() -> None:
        if draft is None:
            return
        course = draft.build()
        if course is not None:
            rows.append(course)

    while index < len(lines):
        if state == ParserState.SEEKING_HEADER:
            start = _find_course_section(lines)
            if start is None:
                logger.debug("No course rows found in %d line(s)", len(lines))
                return []
            if start:
                logger.debug("Skipped %d line(s) before the first course row", start)
            index = start
            state = ParserState.SEEKING_COURSE
            continue

        line = lines[index]
        index += 1

        if _contains_any(line, _TERMINATOR_KEYWORDS):
            flush()
            draft = None
            state = ParserState.SEEKING_COURSE
            continue

        code_match = _COURSE_CODE_RE.match(line)
        if code_match:
            flush()
            draft = _CourseDraft(code=code_match.group(1), class_number=code_match.group(2) or None)
            state = ParserState.COLLECTING_TITLE
            continue

        if state == ParserState.COLLECTING_TITLE:
            draft.title = line
            state = ParserState.COLLECTING_GRADE_AND_CREDITS
        elif state == ParserState.COLLECTING_GRADE_AND_CREDITS:
            draft.absorb(line)
        # SEEKING_COURSE: noise between a terminator and the next course code

    flush()
    return rows


# ── Simple 4-line format ─────────────────────────────────────────────────────

# Leading number, the way a lenient float parse reads "3 credits" as 3.
_LEADING_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)")

_SIMPLE_FIELDS = ("code", "title", "grade", "credits")


def parse_simple_format(content: str) -> list[Course]:
    rows: list[Course] = []
    block: dict = {}
    dropped = 0

    for raw_line in content.split("\n"):
        line = raw_line.strip()
        if not line:
            # Separator; an incomplete block is dropped here.
            if block:
                dropped += 1
            block = {}
            continue

        name = _SIMPLE_FIELDS[len(block)]
        if name == "grade":
            block[name] = line.upper()
        elif name == "credits":
            credits = _to_float(line)
            if credits is None:
                dropped += 1
                block = {}
                continue
            block[name] = credits
        else:
            block[name] = line

        if len(block) == len(_SIMPLE_FIELDS):
            course = _build_course(block["code"], block["title"], block["grade"], block["credits"])
            if course is not None:
                rows.append(course)
            else:
                dropped += 1
            block = {}

    if block:
        dropped += 1
    if dropped:
        logger.debug("Dropped %d incomplete block(s) in simple mode", dropped)
    return rows


def _to_float(value: str) -> float | None:
    match = _LEADING_NUMBER_RE.match(value)
    if not match:
        return None
    number = float(match.group(0))
    if number < 0:
        return None
    return number


def _build_course(
    code: str | None,
    title: str | None,
    grade: str | None,
    credits: float | None,
    class_number: str | None = None,
) -> Course | None:
    if not code or not title or not grade or credits is None:
        return None
    return Course(
        uid=new_uid(),
        code=code,
        class_number=class_number,
        title=title,
        grade=grade,
        credits=credits,
        grade_points=calculate_grade_points(credits, grade),
    )
