"""Application configuration using pydantic-settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Find .env file: check backend dir first, then project root
_BACKEND_DIR = Path(__file__).parent.parent
_PROJECT_ROOT = _BACKEND_DIR.parent
_ENV_FILE = _BACKEND_DIR / ".env" if (_BACKEND_DIR / ".env").exists() else _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Benefits policy values (income threshold, default coverage) live here so the
    scheme rules can change without touching the eligibility logic.
    """

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///./health_registration.db"

    # Application
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5000"

    # Identifier issuance
    health_id_prefix: str = "HLTH"
    card_number_prefix: str = "ABY"
    identifier_max_attempts: int = Field(default=5, ge=2)

    # Benefits scheme policy
    benefits_income_threshold: float = 500_000
    benefits_default_coverage: float = 500_000
    benefits_default_family_size: int = 4

    # Consultations
    default_preferred_language: str = "English"

    # Hospital directory
    hospital_search_default_limit: int = 10
    hospital_search_max_limit: int = 100
    seed_hospitals_on_startup: bool = True


settings = Settings()
