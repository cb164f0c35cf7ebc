from pydantic import BaseModel

from gradebook.models.course import Course


class TranscriptParseRequest(BaseModel):
    raw_text: str


class TranscriptParsePreview(BaseModel):
    """Structured parse result returned by POST /transcripts/parse."""

    courses: list[Course]
    # transcript | simple | none
    mode: str
    notes: list[str]
    needs_review: bool
