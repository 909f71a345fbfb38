"""
TTL configuration and cache key derivation.
"""
from enum import Enum
from typing import Dict, Optional, Tuple

from config.settings import Settings, settings as default_settings


class DataCategory(Enum):
    """Categories of data with different caching behaviors."""
    PLAYER_STATS = "player_stats"     # 10 minutes fresh, 24 hours stale fallback
    YOUTUBE_FEED = "youtube_feed"     # 10 minutes, no stale copy


# Settings attribute holding each TTL, so deployments can tune them via .env
TTL_CONFIG: Dict[DataCategory, Dict[str, Optional[str]]] = {
    DataCategory.PLAYER_STATS: {
        "fresh_ttl": "player_fresh_ttl_seconds",
        "stale_ttl": "player_stale_ttl_seconds",
    },
    DataCategory.YOUTUBE_FEED: {
        "fresh_ttl": "youtube_cache_ttl_seconds",
        "stale_ttl": None,
    },
}

STALE_SUFFIX = ":stale"
YOUTUBE_LATEST_KEY = "yt:latest-r6"


def get_ttl_for_category(
    category: DataCategory,
    cfg: Optional[Settings] = None,
) -> Tuple[int, int]:
    """
    Get TTL configuration for a data category.

    Args:
        category: The data category
        cfg: Settings to read from (module settings when omitted)

    Returns:
        (fresh_ttl, stale_ttl) in seconds, stale_ttl is 0 when the
        category keeps no stale copy
    """
    cfg = cfg or default_settings
    config = TTL_CONFIG[category]

    fresh_ttl = getattr(cfg, config["fresh_ttl"])
    stale_attr = config.get("stale_ttl")
    stale_ttl = getattr(cfg, stale_attr) if stale_attr else 0
    return fresh_ttl, stale_ttl


def player_cache_keys(platform: str, name: str) -> Tuple[str, str]:
    """
    Derive the fresh and stale keys for one player lookup.

    Usernames are case-insensitive upstream, so the key is lower-cased.

    Returns:
        (fresh_key, stale_key)
    """
    fresh_key = f"r6data:player:{platform}:{name.lower()}"
    return fresh_key, f"{fresh_key}{STALE_SUFFIX}"
