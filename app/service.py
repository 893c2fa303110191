"""
Read-through data service combining the TTL cache, the upstream client and
the offline-mode switch.
"""
import threading
import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar

from app.api_client import FootballApiClient
from app.cache import ResourceKind, TTLCache, cache_key, resolve_ttls
from app.schemas import Country, League, Team, Standing

logger = logging.getLogger("football_service")

T = TypeVar("T")


class FootballService:
    """
    Serves football data from cache, falling back to the upstream API.

    Policy for every read:
    1. Cached and live -> return it, no upstream call
    2. Miss while offline -> empty list, no upstream call
    3. Miss while online -> fetch; store only non-empty results

    Concurrent misses on the same key may each reach upstream; the last
    store wins. Nothing here holds the cache lock while fetching.
    """

    def __init__(
        self,
        api_client: FootballApiClient,
        cache: Optional[TTLCache] = None,
        ttls: Optional[Dict[ResourceKind, int]] = None,
        offline_mode: bool = False,
    ):
        """
        Initialize the service.

        Args:
            api_client: Upstream fetcher (must never raise)
            cache: Cache instance, a fresh TTLCache if omitted
            ttls: TTL in milliseconds per resource kind, defaults if omitted
            offline_mode: Initial offline flag
        """
        self._api = api_client
        self._cache = cache if cache is not None else TTLCache()
        self._ttls = resolve_ttls()
        if ttls:
            self._ttls.update(ttls)

        self._offline = threading.Event()
        if offline_mode:
            self._offline.set()

    @property
    def cache(self) -> TTLCache:
        return self._cache

    def ttl_for(self, kind: ResourceKind) -> int:
        return self._ttls[kind]

    # ========================================================================
    # Read-through policy
    # ========================================================================

    def fetch_with_cache(
        self,
        key: str,
        ttl_ms: int,
        fetch_fn: Callable[[], List[T]],
    ) -> List[T]:
        """
        Return the cached value for key or load it with fetch_fn.

        Empty fetch results are returned but never stored.
        """
        cached = self._cache.get(key)
        if cached is not None:
            logger.info(f"Returning {key} from cache")
            return cached

        if self.is_offline_mode():
            logger.warning(f"Offline mode: No cached data available for {key}")
            return []

        data = fetch_fn()
        if data:
            self._cache.put(key, data, ttl_ms)
        else:
            logger.info(f"Upstream returned no data for {key}, not caching")
        return data

    # ========================================================================
    # Resources
    # ========================================================================

    def get_countries(self) -> List[Country]:
        """All countries."""
        kind = ResourceKind.COUNTRIES
        return self.fetch_with_cache(
            cache_key(kind),
            self._ttls[kind],
            self._api.get_countries,
        )

    def get_leagues(self, country_id: str) -> List[League]:
        """Leagues of one country."""
        kind = ResourceKind.LEAGUES
        return self.fetch_with_cache(
            cache_key(kind, country_id),
            self._ttls[kind],
            lambda: self._api.get_leagues(country_id),
        )

    def get_teams(self, league_id: str) -> List[Team]:
        """Teams of one league."""
        kind = ResourceKind.TEAMS
        return self.fetch_with_cache(
            cache_key(kind, league_id),
            self._ttls[kind],
            lambda: self._api.get_teams(league_id),
        )

    def get_standings(
        self,
        league_id: str,
        team_name: Optional[str] = None,
    ) -> List[Standing]:
        """
        League table, optionally narrowed to teams whose name contains team_name.

        Only the full table is cached; the filter runs on every call.
        """
        kind = ResourceKind.STANDINGS
        standings = self.fetch_with_cache(
            cache_key(kind, league_id),
            self._ttls[kind],
            lambda: self._api.get_standings(league_id),
        )
        return filter_standings(standings, team_name)

    # ========================================================================
    # Offline mode and cache control
    # ========================================================================

    def set_offline_mode(self, enabled: bool) -> None:
        """Toggle offline mode. Cached entries are kept either way."""
        if enabled:
            self._offline.set()
        else:
            self._offline.clear()
        logger.info(f"Offline mode {'enabled' if enabled else 'disabled'}")

    def is_offline_mode(self) -> bool:
        return self._offline.is_set()

    def clear_cache(self) -> int:
        """Drop every cached entry. The offline flag is left untouched."""
        count = self._cache.clear()
        logger.info("All cache cleared")
        return count

    def get_cache_stats(self) -> Dict[str, Any]:
        """Cache statistics plus the current policy settings."""
        stats = self._cache.get_stats()
        stats["offline_mode"] = self.is_offline_mode()
        stats["ttl_ms"] = {kind.value: ttl for kind, ttl in self._ttls.items()}
        return stats


def filter_standings(
    standings: List[Standing],
    team_name: Optional[str],
) -> List[Standing]:
    """
    Case-insensitive substring match on team_name.

    A blank or missing filter returns the input unchanged. A non-blank filter
    is matched as given, surrounding spaces included. Rows without a team
    name never match a non-blank filter.
    """
    if team_name is None or not team_name.strip():
        return standings

    needle = team_name.lower()
    return [
        s for s in standings
        if s.team_name is not None and needle in s.team_name.lower()
    ]
