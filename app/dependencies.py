"""
Service wiring for FastAPI dependencies.

One FootballService (and so one cache and one offline flag) per process,
handed to routes through Depends so tests can swap it out.
"""
from functools import lru_cache

from app.api_client import FootballApiClient
from app.cache import ExpirySweeper, TTLCache, resolve_ttls
from app.service import FootballService
from config.settings import settings


@lru_cache
def get_football_service() -> FootballService:
    """Shared read-through service built from settings"""
    return FootballService(
        api_client=FootballApiClient.from_settings(settings),
        cache=TTLCache(),
        ttls=resolve_ttls(settings),
        offline_mode=settings.offline_mode,
    )


@lru_cache
def get_expiry_sweeper() -> ExpirySweeper:
    """Background sweeper bound to the shared service's cache"""
    return ExpirySweeper(
        get_football_service().cache,
        interval_seconds=settings.cache_sweep_interval_seconds,
    )
