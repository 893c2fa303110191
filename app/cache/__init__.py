"""
In-memory caching with per-resource TTL and lazy expiry.
"""
from .core import CacheEntry, ResourceKind
from .ttl_policies import (
    DEFAULT_TTL_MS,
    cache_key,
    get_ttl_for_kind,
    resolve_ttls,
)
from .manager import TTLCache
from .sweeper import ExpirySweeper

__all__ = [
    # Core types
    "CacheEntry",
    "ResourceKind",
    # TTL policies
    "DEFAULT_TTL_MS",
    "cache_key",
    "get_ttl_for_kind",
    "resolve_ttls",
    # Storage
    "TTLCache",
    "ExpirySweeper",
]
