"""
Player lookup orchestration.

Decides which tier answers a lookup, in order:
fresh cache -> live r6data -> stale cache -> mock profile.
A lookup never fails: every degradable error ends in one of those tiers,
with the reason recorded under "debug".
"""
import logging
import time
from typing import Any, Callable, Dict, Optional

import requests

from config.settings import Settings, settings as default_settings
from siegestats.cache import (
    CacheSource,
    DataCategory,
    RequestCoalescer,
    TTLCache,
    get_ttl_for_category,
    player_cache_keys,
)
from siegestats.normalizer import (
    PlayerStatsPayload,
    build_mock_player_payload,
    normalize_player_stats,
)
from siegestats.r6data_client import SOURCE_NAME, R6DataClient, UpstreamResponse
from siegestats.utils.helpers import to_number

logger = logging.getLogger("player_service")

MOCK_SOURCE = "mock"
DEFAULT_RETRY_AFTER_SECONDS = 3600


def retry_after_hint(response: UpstreamResponse) -> Any:
    """Seconds to back off after a 429: body "retryAfter", then the header, then 1 hour."""
    if isinstance(response.body, dict) and response.body.get("retryAfter") is not None:
        return response.body["retryAfter"]
    header = response.headers.get("Retry-After")
    if header is not None:
        return to_number(header, default=DEFAULT_RETRY_AFTER_SECONDS)
    return DEFAULT_RETRY_AFTER_SECONDS


class PlayerLookupService:
    """
    Owns the cache policy for player profiles.

    The cache and client are injected so each app (and each test) can use
    its own instances.
    """

    def __init__(
        self,
        cache: TTLCache,
        client: R6DataClient,
        cfg: Optional[Settings] = None,
        coalescer: Optional[RequestCoalescer] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._cache = cache
        self._client = client
        self._cfg = cfg or default_settings
        self._coalescer = coalescer or RequestCoalescer()
        self._clock = clock
        self.fresh_ttl, self.stale_ttl = get_ttl_for_category(DataCategory.PLAYER_STATS, self._cfg)

    # -------------------------------------------------------------------------
    # Response envelopes
    # -------------------------------------------------------------------------

    def _took_ms(self, started: float) -> int:
        return int((self._clock() - started) * 1000)

    def _mock_response(self, platform: str, name: str, debug: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "cached": False,
            "mock": True,
            "source": MOCK_SOURCE,
            "debug": debug,
            "data": build_mock_player_payload(platform, name),
        }

    def _provider_response(self, data: Dict[str, Any], cached: bool, debug: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "cached": cached,
            "mock": False,
            "source": SOURCE_NAME,
            "debug": debug,
            "data": data,
        }

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def lookup(self, platform: str, name: str, nocache: bool = False) -> Dict[str, Any]:
        """
        Resolve a player profile.

        Args:
            platform: Platform path segment; only the supported one goes upstream
            name: Username as typed
            nocache: Skip the fresh cache read (stale fallback and writes still happen)

        Returns:
            {"cached", "mock", "source", "debug", "data"}
        """
        started = self._clock()

        if platform != self._cfg.supported_platform:
            logger.info(f"[PLAYER] platform={platform} (only {self._cfg.supported_platform}) -> MOCK")
            return self._mock_response(platform, name, {"tookMs": self._took_ms(started)})

        if not self._client.configured:
            logger.warning("[R6DATA] R6DATA_API_KEY is not set -> MOCK")
            return self._mock_response(platform, name, {"error": "Missing R6DATA_API_KEY"})

        fresh_key, stale_key = player_cache_keys(platform, name)

        if nocache:
            logger.info(f"[R6DATA] nocache=1, skipping fresh cache for {platform}/{name}")
        else:
            cached = self._cache.get(fresh_key)
            if cached is not None:
                logger.info(f"[R6DATA] CACHE HIT (fresh) {platform}/{name}")
                return self._provider_response(cached, cached=True, debug={
                    "cache": CacheSource.FRESH.value,
                    "tookMs": self._took_ms(started),
                })

        try:
            return self._coalescer.run(
                fresh_key,
                lambda: self._fetch_live(platform, name, fresh_key, stale_key, started),
            )
        except TimeoutError as e:
            # Gave up waiting on another request's in-flight lookup
            logger.warning(f"[R6DATA] coalesced lookup timed out: {e}")
            return self._fallback(
                platform, name, stale_key, "exception_or_timeout", started,
                stale_debug={"error": str(e)},
                mock_debug={"error": str(e)},
            )

    def _fallback(
        self,
        platform: str,
        name: str,
        stale_key: str,
        reason: str,
        started: float,
        stale_debug: Optional[Dict[str, Any]] = None,
        mock_debug: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Serve the stale copy if one is still held, otherwise the mock profile."""
        stale = self._cache.get(stale_key)
        if stale is not None:
            logger.warning(f"[R6DATA] serving stale copy for {platform}/{name} ({reason})")
            return self._provider_response(stale, cached=True, debug={
                "cache": CacheSource.STALE.value,
                "reason": reason,
                **(stale_debug or {}),
                "tookMs": self._took_ms(started),
            })

        logger.warning(f"[R6DATA] no stale copy for {platform}/{name} ({reason}) -> MOCK")
        return self._mock_response(platform, name, {
            **(mock_debug or {}),
            "tookMs": self._took_ms(started),
        })

    def _fetch_live(
        self,
        platform: str,
        name: str,
        fresh_key: str,
        stale_key: str,
        started: float,
    ) -> Dict[str, Any]:
        try:
            stats = self._client.fetch_stats(name)
        except requests.RequestException as e:
            logger.warning(f"[R6DATA] stats error/timeout: {e}")
            return self._fallback(
                platform, name, stale_key, "exception_or_timeout", started,
                stale_debug={"error": str(e)},
                mock_debug={"error": str(e)},
            )

        if stats.rate_limited:
            retry_after = retry_after_hint(stats)
            logger.warning(f"[R6DATA] 429 rate limit, retryAfter={retry_after}")
            return self._fallback(
                platform, name, stale_key, "rate_limited", started,
                stale_debug={"retryAfter": retry_after},
                mock_debug={"error": "R6DATA rate limited", "retryAfter": retry_after},
            )

        if not stats.ok:
            logger.warning(f"[R6DATA] stats error: HTTP {stats.status_code} {stats.body}")
            return self._fallback(platform, name, stale_key, f"stats_http_{stats.status_code}", started)

        # Operator data is optional: the stats call alone is enough for a profile
        operator_doc = self._fetch_operator_doc(name)

        payload = normalize_player_stats(platform, name, stats.body, operator_doc)
        self._log_summary(payload)

        data = payload.to_dict()
        self._cache.set(fresh_key, data, self.fresh_ttl)
        self._cache.set(stale_key, data, self.stale_ttl)

        return self._provider_response(data, cached=False, debug={
            "operatorsPlaylist": payload.operators_playlist,
            "tookMs": self._took_ms(started),
        })

    def _fetch_operator_doc(self, name: str) -> Optional[Any]:
        try:
            response = self._client.fetch_operator_stats(name)
        except requests.RequestException as e:
            logger.warning(f"[R6DATA] operatorStats timeout/error: {e}")
            return None
        if not response.ok:
            logger.warning(f"[R6DATA] operatorStats HTTP {response.status_code}, continuing without operators")
            return None
        return response.body

    def _log_summary(self, payload: PlayerStatsPayload) -> None:
        ranked = payload.ranked
        unranked = payload.unranked.totals
        operators = ", ".join(f"{op.name}({op.played})" for op in payload.top_operators) or "N/A"
        logger.info(
            f"[R6DATA] {payload.platform}/{payload.username} | "
            f"current={ranked.current_rank} mmr={ranked.mmr} | "
            f"peak={ranked.peak_rank} peakMmr={ranked.peak_mmr} | "
            f"ranked m={ranked.totals.matches} w={ranked.totals.wins} l={ranked.totals.losses} "
            f"kd={ranked.totals.kd} wr={ranked.totals.win_rate} | "
            f"unranked m={unranked.matches} kd={unranked.kd} wr={unranked.win_rate} | "
            f"seasons={len(payload.ranked_seasons)} | operators: {operators}"
        )
