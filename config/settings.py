"""Configuration management using pydantic-settings."""
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


HACKATHONS_URL = (
    "https://devpost.com/api/hackathons"
    "?challenge_type[]=online&status[]=upcoming&status[]=open"
)
HACKATHONS_REFERER = (
    "https://devpost.com/hackathons"
    "?challenge_type[]=online&status[]=upcoming&status[]=open"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Upstream sources
    hackathons_url: str = HACKATHONS_URL
    hackathons_referer: str = HACKATHONS_REFERER
    news_url: str = "https://www.developer-tech.com/"
    contests_url: str = "https://competeapi.vercel.app/contests/upcoming"

    # Cache windows, one per resource
    hackathons_ttl_seconds: int = 3600
    news_ttl_seconds: int = 600
    contests_ttl_seconds: int = 3600

    # Outbound HTTP
    upstream_timeout_seconds: float = 30.0
    # 1 means a single attempt (no retry)
    upstream_retry_attempts: int = 1

    # Share one in-flight refresh between concurrent stale reads
    coalesce_refreshes: bool = True
    coalesce_timeout_seconds: float = 30.0

    # Notes store
    database_url: str = "sqlite:///./devfeed.db"
    daily_note_limit: int = 20

    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
