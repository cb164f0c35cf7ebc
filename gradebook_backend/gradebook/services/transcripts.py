from gradebook.schemas.transcript import TranscriptParsePreview
from gradebook.services.grades import is_in_progress
from gradebook.services.transcript_parser import (
    parse_simple_format,
    parse_transcript_text,
)


def preview_transcript(raw_text: str) -> TranscriptParsePreview:
    """Parse pasted text and explain what was found, without storing anything."""
    notes: list[str] = []
    needs_review = False
    mode = "transcript"
    courses = parse_transcript_text(raw_text)
    if not courses:
        mode = "simple"
        courses = parse_simple_format(raw_text)

    if not raw_text.strip():
        mode = "none"
        notes.append("No text was provided.")
    elif not courses:
        mode = "none"
        needs_review = True
        notes.append("No courses were detected. The format may not be supported.")
    else:
        pending = [c for c in courses if is_in_progress(c.grade)]
        if pending:
            notes.append(
                f"{len(pending)} course(s) have no final grade; the semester will not count toward the overall GPA."
            )
        duplicates = _duplicate_codes([c.code for c in courses])
        if duplicates:
            needs_review = True
            notes.append(f"Repeated course code(s): {', '.join(duplicates)}. Check for duplicate rows.")

    return TranscriptParsePreview(
        courses=courses,
        mode=mode,
        notes=notes,
        needs_review=needs_review,
    )


def _duplicate_codes(codes: list[str]) -> list[str]:
    seen: set[str] = set()
    duplicates: list[str] = []
    for code in codes:
        if code in seen and code not in duplicates:
            duplicates.append(code)
        seen.add(code)
    return duplicates
