from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from dotenv import load_dotenv

# Load .env file into os.environ BEFORE pydantic reads it so scripts,
# Alembic and the Streamlit UI all see the same environment.
load_dotenv()


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./talentflow.db"
    DATABASE_ECHO: bool = False

    # API server
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 8000
    ALLOWED_ORIGINS: str = "*"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Simulated network conditions (latency + random write failures).
    # Off by default; turn on to exercise client retry/error paths manually.
    SIMULATE_NETWORK: bool = False
    LATENCY_MIN_MS: int = 200
    LATENCY_MAX_MS: int = 1200
    WRITE_FAILURE_RATE: float = 0.08
    ASSESSMENT_SAVE_FAILURE_RATE: float = 0.02

    # Pagination defaults
    DEFAULT_JOB_PAGE_SIZE: int = 10
    DEFAULT_CANDIDATE_PAGE_SIZE: int = 50
    MAX_PAGE_SIZE: int = 200

    # Used by the Streamlit UI to identify the acting user
    UI_API_KEY: Optional[str] = None

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",  # ignore unknown env vars instead of raising errors
    )


settings = Settings()
