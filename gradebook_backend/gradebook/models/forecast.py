from pydantic import BaseModel


class ForecastPoint(BaseModel):
    term: str
    year_level: str
    gpa: float | None = None  # None for in-progress and synthetic terms
    cumulative_gpa: float | None = None
    projected_gpa: float | None = None
    sort_key: int
    is_projection: bool = False
