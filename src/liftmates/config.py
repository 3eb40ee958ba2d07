"""Application settings loaded from the environment."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Default data directory (repository root / data)
DATA_DIR = Path(__file__).parent.parent.parent / "data"


class Settings(BaseSettings):
    """Settings loaded from LIFTMATES_* environment variables and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LIFTMATES_",
        case_sensitive=False,
        extra="ignore",
    )

    data_dir: Path = DATA_DIR
    store: str = "sqlite"  # "sqlite" or "rest"

    # REST store (PostgREST-compatible endpoint)
    rest_url: str = "http://localhost:3000"
    rest_api_key: str | None = None

    # Identity of the signed-in user, issued by the auth provider
    auth_id: str | None = None

    log_level: str = "WARNING"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
