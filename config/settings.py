"""Configuration management using pydantic-settings."""
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # apifootball.com configuration
    api_football_key: Optional[str] = None
    api_football_base_url: str = "https://apiv3.apifootball.com"
    api_timeout_ms: int = 10000

    # Upper bound on simultaneous upstream requests
    max_concurrent_requests: int = 10

    # Cache TTLs per resource kind (milliseconds)
    cache_ttl_countries_ms: int = 86_400_000  # 24 hours
    cache_ttl_leagues_ms: int = 3_600_000     # 1 hour
    cache_ttl_teams_ms: int = 3_600_000       # 1 hour
    cache_ttl_standings_ms: int = 300_000     # 5 minutes

    # Background sweep of expired entries, 0 disables it
    cache_sweep_interval_seconds: float = 300.0

    # Serve from cache only at startup
    offline_mode: bool = False

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
