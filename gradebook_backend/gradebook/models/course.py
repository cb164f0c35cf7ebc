from uuid import uuid4

from pydantic import BaseModel, Field


def new_uid() -> str:
    return uuid4().hex


class Course(BaseModel):
    # Random, not derived from the code, so repeated course codes stay distinct.
    uid: str = Field(default_factory=new_uid)
    code: str = ""
    class_number: str | None = None
    title: str = ""
    grade: str = ""
    credits: float = 0.0
    grade_points: float = 0.0
