"""Configuration settings for fitcoach."""

from pathlib import Path
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


# __file__ = src/fitcoach/config.py
# .parent.parent.parent = project root
PACKAGE_ROOT = Path(__file__).parent
PROJECT_ROOT = PACKAGE_ROOT.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FITCOACH_",
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:8081", "http://localhost:19006"]

    # Storage
    storage_backend: str = "sqlite"  # "sqlite" or "memory"
    storage_namespace: str = "fitcoach"
    data_dir: Path = PROJECT_ROOT / "data"
    db_path: Path | None = None

    # OpenAI (coach)
    openai_api_key: str = ""
    llm_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.8
    llm_max_tokens: int = 2048
    llm_timeout: float = 30.0

    # YouTube Data API (video catalog)
    youtube_api_key: str = ""
    youtube_base_url: str = "https://www.googleapis.com/youtube/v3"
    video_timeout: float = 10.0

    def model_post_init(self, __context) -> None:
        """Set default database path after initialization."""
        if self.db_path is None:
            self.db_path = self.data_dir / "fitcoach.db"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
