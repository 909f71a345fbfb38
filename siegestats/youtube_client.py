"""
Latest Rainbow Six Siege video from the Ubisoft YouTube channel feed.
No API key needed, the public channel RSS feed is enough.
"""
import logging
from typing import Any, Dict, Optional

import requests

from config.settings import Settings, settings as default_settings
from siegestats.cache import DataCategory, TTLCache, YOUTUBE_LATEST_KEY, get_ttl_for_category
from siegestats.feed import find_latest_relevant

logger = logging.getLogger("youtube_client")

FEED_HEADERS = {
    "user-agent": "Mozilla/5.0",
    "accept": "application/xml,text/xml;q=0.9,*/*;q=0.8",
}


class FeedUnavailableError(Exception):
    """The feed request came back with a non-2xx status."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"YouTube feed returned HTTP {status_code}")


class NoRelevantVideoError(LookupError):
    """The feed was fetched but holds no recent Siege video."""


class LatestVideoService:
    """
    Finds the newest Siege-related upload and caches the answer.

    Usage:
        service = LatestVideoService(cache)
        payload = service.latest()  # {"cached": ..., "feed": ..., "video": {...}}
    """

    def __init__(
        self,
        cache: TTLCache,
        cfg: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ):
        self._cache = cache
        self._cfg = cfg or default_settings
        self._session = session or requests.Session()

    def fetch_feed(self) -> str:
        """
        Download the raw feed text.

        Raises:
            FeedUnavailableError: upstream answered with a non-2xx status
            requests.RequestException: transport failure or timeout
        """
        response = self._session.get(
            self._cfg.youtube_feed_url,
            headers=FEED_HEADERS,
            timeout=self._cfg.upstream_timeout_seconds,
        )
        if not response.ok:
            logger.warning(f"YouTube feed HTTP {response.status_code}")
            raise FeedUnavailableError(response.status_code)
        return response.text

    def latest(self) -> Dict[str, Any]:
        """
        Raises:
            NoRelevantVideoError: nothing in the feed matched
            FeedUnavailableError / requests.RequestException: see fetch_feed()
        """
        cached = self._cache.get(YOUTUBE_LATEST_KEY)
        if cached is not None:
            logger.debug(f"CACHE HIT (fresh): {YOUTUBE_LATEST_KEY}")
            return {**cached, "cached": True}

        video = find_latest_relevant(self.fetch_feed())
        if video is None:
            raise NoRelevantVideoError("No recent Rainbow Six Siege video found in the channel feed.")

        payload = {
            "cached": False,
            "feed": self._cfg.youtube_feed_label,
            "video": video.to_dict(),
        }
        ttl, _ = get_ttl_for_category(DataCategory.YOUTUBE_FEED, self._cfg)
        self._cache.set(YOUTUBE_LATEST_KEY, payload, ttl)
        logger.info(f"Latest Siege video: {video.video_id} ({video.title})")
        return payload
