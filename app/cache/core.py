"""
Core cache data structures.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ResourceKind(Enum):
    """Football resources served through the cache, each with its own TTL."""
    COUNTRIES = "countries"
    LEAGUES = "leagues"
    TEAMS = "teams"
    STANDINGS = "standings"


@dataclass(frozen=True)
class CacheEntry:
    """
    A cached value with its absolute expiry.

    expires_at is a reading of the cache's monotonic clock, in seconds.
    Entries are immutable; an overwrite replaces the whole entry.
    """
    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        """Strict comparison: an entry read exactly at expires_at is still live."""
        return now > self.expires_at

    def remaining_seconds(self, now: float) -> float:
        """Seconds until expiry, negative once expired."""
        return self.expires_at - now
