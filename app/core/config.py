"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "placement_user"
    postgres_password: str = "password"
    postgres_db: str = "internship_db"

    # Repository: "postgres" or "memory" (empty store, for demos)
    repository_backend: str = "postgres"
    create_schema_on_startup: bool = False

    # JWT Auth (tokens are issued by the login service, we only verify)
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # Analytics windows and leaderboard sizes
    monthly_window_months: int = 12
    semester_window_years: int = 2
    weekly_window_weeks: int = 8
    attendance_window_weeks: int = 6
    dashboard_attendance_weeks: int = 4
    top_interns_limit: int = 5
    top_companies_limit: int = 10

    # App
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = True

    @property
    def postgres_url(self) -> str:
        """Construct PostgreSQL connection URL"""
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
