"""
Thread-safe in-memory cache with per-entry TTL and lazy expiry.
"""
import threading
import logging
import time
from typing import Any, Callable, Dict, Optional

from .core import CacheEntry

logger = logging.getLogger("cache.manager")


class TTLCache:
    """
    String-keyed cache where every entry carries its own absolute expiry.

    - Expired entries are removed the first time a read touches them
    - evict_expired() sweeps the whole map for keys that are never re-read
    - Every operation runs under one lock, so readers never see a torn entry

    The clock must be monotonic; it is injectable so tests can move time.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Initialize the cache.

        Args:
            clock: Zero-argument callable returning the current time in seconds
        """
        self._cache: Dict[str, CacheEntry] = {}
        self._cache_lock = threading.RLock()
        self._clock = clock

        # Stats tracking
        self._stats = {
            "hits": 0,
            "misses": 0,
            "expirations": 0,
        }

    def put(self, key: str, value: Any, ttl_ms: float) -> None:
        """
        Store a value, replacing any existing entry for the key.

        A TTL of zero or less yields an entry that is already expired, so the
        next read removes it.
        """
        with self._cache_lock:
            if ttl_ms <= 0:
                expires_at = float("-inf")
            else:
                expires_at = self._clock() + ttl_ms / 1000.0
            entry = CacheEntry(value=value, expires_at=expires_at)
            self._cache[key] = entry
        logger.debug(f"Cached entry with key: {key} (TTL: {ttl_ms}ms)")

    def get(self, key: str) -> Optional[Any]:
        """
        Get a live value.

        Returns:
            The cached value, or None when absent or expired
        """
        with self._cache_lock:
            entry = self._cache.get(key)

            if entry is None:
                self._stats["misses"] += 1
                logger.debug(f"CACHE MISS: {key}")
                return None

            if entry.is_expired(self._clock()):
                del self._cache[key]
                self._stats["misses"] += 1
                self._stats["expirations"] += 1
                logger.debug(f"CACHE EXPIRED: {key}")
                return None

            self._stats["hits"] += 1
            logger.debug(f"CACHE HIT: {key}")
            return entry.value

    def contains(self, key: str) -> bool:
        """Check for a live entry. Expired entries are removed as a side effect."""
        return self.get(key) is not None

    def invalidate(self, key: str) -> bool:
        """
        Invalidate a specific cache entry.

        Returns:
            True if entry was found and removed
        """
        with self._cache_lock:
            if key in self._cache:
                del self._cache[key]
                logger.info(f"Invalidated cache: {key}")
                return True
            return False

    def clear(self) -> int:
        """
        Clear all cache entries.

        Returns:
            Number of entries cleared
        """
        with self._cache_lock:
            count = len(self._cache)
            self._cache.clear()
        logger.info(f"Cleared {count} cache entries")
        return count

    def evict_expired(self) -> int:
        """
        Remove every expired entry.

        Returns:
            Number of entries evicted
        """
        with self._cache_lock:
            now = self._clock()
            expired = [k for k, entry in self._cache.items() if entry.is_expired(now)]
            for key in expired:
                del self._cache[key]
            self._stats["expirations"] += len(expired)

        if expired:
            logger.info(f"Evicted {len(expired)} expired cache entries")
        return len(expired)

    def size(self) -> int:
        """Number of stored entries, including expired ones not yet swept."""
        with self._cache_lock:
            return len(self._cache)

    def __len__(self) -> int:
        return self.size()

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._cache_lock:
            hits = self._stats["hits"]
            total_requests = hits + self._stats["misses"]
            hit_rate = (hits / total_requests * 100) if total_requests > 0 else 0

            return {
                "entries": len(self._cache),
                "hits": hits,
                "misses": self._stats["misses"],
                "expirations": self._stats["expirations"],
                "hit_rate_percent": round(hit_rate, 1),
            }
