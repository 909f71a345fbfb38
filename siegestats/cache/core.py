"""
Core cache data structures.
"""
import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger("cache.core")

DEFAULT_TTL_SECONDS = 300  # 5 minutes


class CacheSource(Enum):
    """Where a served payload came from."""
    FRESH = "fresh"       # Within the short TTL
    STALE = "stale"       # Long-lived fallback copy, served when upstream fails


@dataclass
class CacheEntry:
    """
    A cached value and the absolute time (clock seconds) it stops being valid.
    """
    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        """Entries are valid up to and including expires_at."""
        return now > self.expires_at


class TTLCache:
    """
    In-memory key -> value map with per-entry expiry.

    - Expiry is only checked on read; an expired entry is removed by get()
    - No size limit and no background sweep
    - Thread-safe, last write wins

    Usage:
        cache = TTLCache()
        cache.set("stats:uplay:someone", payload, ttl_seconds=600)
        payload = cache.get("stats:uplay:someone")  # None once expired
    """

    def __init__(
        self,
        default_ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            default_ttl_seconds: TTL used when set() is called without one
            clock: Returns the current time in seconds (injectable for tests)
        """
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self.default_ttl_seconds = default_ttl_seconds

        self._stats = {
            "hits": 0,
            "misses": 0,
            "expired": 0,
            "writes": 0,
        }

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None if absent or expired."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._stats["misses"] += 1
                return None
            if entry.is_expired(now):
                del self._entries[key]
                self._stats["expired"] += 1
                self._stats["misses"] += 1
                logger.debug(f"CACHE EXPIRED: {key}")
                return None
            self._stats["hits"] += 1
            return entry.value

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        """Insert or overwrite a value, expiring ttl_seconds from now."""
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        entry = CacheEntry(value=value, expires_at=self._clock() + ttl)
        with self._lock:
            self._entries[key] = entry
            self._stats["writes"] += 1

    def delete(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if an entry was found and removed
        """
        with self._lock:
            if key in self._entries:
                del self._entries[key]
                logger.info(f"Invalidated cache: {key}")
                return True
            return False

    def clear(self) -> int:
        """Drop every entry and return how many were removed."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info(f"Cleared {count} cache entries")
        return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        # Presence only, expiry is not checked here
        with self._lock:
            return key in self._entries

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            lookups = self._stats["hits"] + self._stats["misses"]
            hit_rate = (self._stats["hits"] / lookups * 100) if lookups > 0 else 0

            return {
                "entries": len(self._entries),
                "hits": self._stats["hits"],
                "misses": self._stats["misses"],
                "expired": self._stats["expired"],
                "writes": self._stats["writes"],
                "hit_rate_percent": round(hit_rate, 1),
            }
