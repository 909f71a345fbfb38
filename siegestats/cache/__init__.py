"""
In-memory caching with fresh/stale TTL classes and lookup coalescing.
"""
from .core import CacheEntry, CacheSource, TTLCache, DEFAULT_TTL_SECONDS
from .ttl_policies import (
    TTL_CONFIG,
    DataCategory,
    STALE_SUFFIX,
    YOUTUBE_LATEST_KEY,
    get_ttl_for_category,
    player_cache_keys,
)
from .coalescer import RequestCoalescer

__all__ = [
    # Core types
    "CacheEntry",
    "CacheSource",
    "TTLCache",
    "DEFAULT_TTL_SECONDS",
    # TTL policies
    "TTL_CONFIG",
    "DataCategory",
    "STALE_SUFFIX",
    "YOUTUBE_LATEST_KEY",
    "get_ttl_for_category",
    "player_cache_keys",
    # Coalescing
    "RequestCoalescer",
]
