"""Configuration settings loaded from .env file."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings, loaded from .env file.

    Every field can be overridden with a ``NOVELSHELF_``-prefixed
    environment variable, e.g. ``NOVELSHELF_SERVICE_BASE_URL``.
    """

    # Database
    sqlite_db_path: Path = Path("./data/library.db")

    # Scraper / translation service
    service_base_url: str = "http://127.0.0.1:8000"
    scrape_endpoint: str = "/scrape"
    extract_endpoint: str = "/extract"
    translate_endpoint: str = "/translate"
    request_timeout: float = 120.0  # Translation calls on long chapters are slow

    # Library
    recent_novels_limit: int = 3

    # Logging
    log_dir: Path = Path("./data/logs")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "NOVELSHELF_",
    }

    @field_validator("service_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("service_base_url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("scrape_endpoint", "extract_endpoint", "translate_endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("Service endpoint must start with '/'")
        return v

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("request_timeout must be > 0")
        return v

    @field_validator("recent_novels_limit")
    @classmethod
    def validate_recent_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError("recent_novels_limit must be >= 1")
        return v

    @field_validator("sqlite_db_path", "log_dir")
    @classmethod
    def ensure_parent_dirs(cls, v: Path) -> Path:
        v.parent.mkdir(parents=True, exist_ok=True)
        return v


_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
