"""
TTL configuration and cache key derivation per resource kind.
"""
from typing import Dict, Optional

from .core import ResourceKind


# Default TTLs by resource kind (in milliseconds)
DEFAULT_TTL_MS: Dict[ResourceKind, int] = {
    ResourceKind.COUNTRIES: 86_400_000,   # 24 hours, practically static
    ResourceKind.LEAGUES: 3_600_000,      # 1 hour
    ResourceKind.TEAMS: 3_600_000,        # 1 hour
    ResourceKind.STANDINGS: 300_000,      # 5 minutes, changes on match days
}

# Settings attribute holding the override for each kind
_SETTINGS_FIELDS: Dict[ResourceKind, str] = {
    ResourceKind.COUNTRIES: "cache_ttl_countries_ms",
    ResourceKind.LEAGUES: "cache_ttl_leagues_ms",
    ResourceKind.TEAMS: "cache_ttl_teams_ms",
    ResourceKind.STANDINGS: "cache_ttl_standings_ms",
}


def get_ttl_for_kind(kind: ResourceKind, settings: Optional[object] = None) -> int:
    """
    Get the TTL for a resource kind.

    Args:
        kind: The resource kind
        settings: Object carrying cache_ttl_<kind>_ms overrides (e.g. Settings).
                  Missing or None attributes fall back to the defaults.

    Returns:
        TTL in milliseconds
    """
    if settings is not None:
        override = getattr(settings, _SETTINGS_FIELDS[kind], None)
        if override is not None:
            return int(override)
    return DEFAULT_TTL_MS[kind]


def resolve_ttls(settings: Optional[object] = None) -> Dict[ResourceKind, int]:
    """TTL table for every resource kind."""
    return {kind: get_ttl_for_kind(kind, settings) for kind in ResourceKind}


def cache_key(kind: ResourceKind, identifier: Optional[str] = None) -> str:
    """
    Build the cache key for a resource.

    Countries has a single global key; every other kind is scoped by the
    identifier of its parent (country ID for leagues, league ID for teams
    and standings).

    Examples:
        cache_key(ResourceKind.COUNTRIES)             -> "countries"
        cache_key(ResourceKind.LEAGUES, "44")         -> "leagues_44"
        cache_key(ResourceKind.STANDINGS, "152")      -> "standings_152"
    """
    if kind == ResourceKind.COUNTRIES:
        return kind.value
    if identifier is None:
        raise ValueError(f"{kind.value} cache key requires an identifier")
    return f"{kind.value}_{identifier}"
