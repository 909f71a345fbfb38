"""
HTTP client for the r6data stats API.
Every call is bounded by the configured timeout as a whole: requests only
limits the connect and each socket read, so the body is streamed and the
client gives up once the total deadline passes. HTTP error statuses are
returned to the caller, only transport failures (timeouts included) raise.
"""
import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

import requests
from requests.structures import CaseInsensitiveDict

from config.settings import Settings, settings as default_settings

logger = logging.getLogger("r6data_client")

SOURCE_NAME = "r6data"


@dataclass
class UpstreamResponse:
    """Status, decoded body and headers of one provider call."""
    status_code: int
    body: Any
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def rate_limited(self) -> bool:
        return self.status_code == 429


def safe_json(text: str) -> Any:
    """
    Decode a response body, wrapping anything that is not JSON as
    {"_raw": text} so callers always get a JSON-serializable value.
    """
    try:
        return json.loads(text)
    except ValueError:
        return {"_raw": text}


class R6DataClient:
    """
    Thin wrapper over the r6data /stats endpoint.

    Usage:
        client = R6DataClient(api_key="...")
        resp = client.fetch_stats("SomePlayer")
        if resp.ok:
            doc = resp.body
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        cfg: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        cfg = cfg or default_settings
        self.api_key = api_key if api_key is not None else cfg.r6data_api_key
        self.base_url = cfg.r6data_base_url.rstrip("/")
        self.timeout = cfg.upstream_timeout_seconds
        self.platform_type = cfg.supported_platform
        self.platform_families = cfg.platform_families
        self._session = session or requests.Session()
        self._clock = clock

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _get_headers(self) -> Dict[str, str]:
        return {
            "api-key": self.api_key or "",
            "Accept": "application/json",
        }

    def _get(self, params: Dict[str, str]) -> UpstreamResponse:
        """
        GET {base_url}/stats with params.

        Raises:
            requests.RequestException: on timeout or connection failure
        """
        deadline = self._clock() + self.timeout
        response = self._session.get(
            f"{self.base_url}/stats",
            headers=self._get_headers(),
            params=params,
            timeout=self.timeout,
            stream=True,
        )
        logger.info(f"[R6DATA] {params.get('type')} HTTP {response.status_code}")
        return UpstreamResponse(
            status_code=response.status_code,
            body=safe_json(self._read_text(response, deadline)),
            headers=CaseInsensitiveDict(response.headers),
        )

    def _read_text(self, response: requests.Response, deadline: float) -> str:
        """Read the streamed body, raising requests.Timeout past the deadline."""
        chunks = []
        try:
            for chunk in response.iter_content(chunk_size=8192):
                if self._clock() > deadline:
                    raise requests.Timeout(f"r6data response took longer than {self.timeout}s")
                chunks.append(chunk)
        finally:
            response.close()
        return b"".join(chunks).decode(response.encoding or "utf-8", errors="replace")

    def fetch_stats(self, name: str) -> UpstreamResponse:
        """Aggregate board/season profile for a player."""
        return self._get({
            "type": "stats",
            "nameOnPlatform": name,
            "platformType": self.platform_type,
            "platform_families": self.platform_families,
        })

    def fetch_operator_stats(self, name: str, modes: str = "ranked") -> UpstreamResponse:
        """Per-operator lifetime round counts for a player."""
        return self._get({
            "type": "operatorStats",
            "nameOnPlatform": name,
            "platformType": self.platform_type,
            "modes": modes,
        })
