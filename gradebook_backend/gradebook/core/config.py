from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    environment: str = "development"
    log_level: str = "INFO"
    cors_allow_origins: list[str] = ["*"]

    # Synthetic future semesters appended after the last known term.
    forecast_max_periods: int = 8
    # e.g. "Spring 2027"; None stops at the Senior Spring term instead.
    forecast_termination_term: str | None = None

    class Config:
        env_file = ".env"
        env_prefix = "GRADEBOOK_"
        extra = "ignore"


settings = Settings()
