"""
HTTP surface: player lookups, latest video and the operator catalog.
"""
from unittest.mock import MagicMock

import requests
from fastapi.testclient import TestClient

from siegestats.cache import TTLCache
from siegestats.main import create_app
from siegestats.r6data_client import UpstreamResponse
from siegestats.youtube_client import FeedUnavailableError, NoRelevantVideoError
from upstream_fakes import full_profile, ok, stats_document


# =============================================================================
# Player lookups
# =============================================================================

def test_player_lookup_live(api, fake_client):
    fake_client.queue_stats(ok(stats_document(ranked=[full_profile(wins=3, losses=1, rank=36)])))

    response = api.get("/api/player/uplay/Pengu")

    assert response.status_code == 200
    body = response.json()
    assert body["cached"] is False
    assert body["mock"] is False
    assert body["source"] == "r6data"
    assert "tookMs" in body["debug"]
    assert body["data"]["username"] == "Pengu"
    assert body["data"]["stats"]["ranked"]["currentRank"] == "Champion"
    assert body["data"]["stats"]["ranked"]["winRate"] == 75.0


def test_player_lookup_cached_then_nocache(api, fake_client):
    fake_client.queue_stats(ok(stats_document()), ok(stats_document()))

    api.get("/api/player/uplay/Pengu")
    cached = api.get("/api/player/uplay/Pengu").json()
    bypass = api.get("/api/player/uplay/Pengu?nocache=1").json()

    assert cached["cached"] is True
    assert bypass["cached"] is False


def test_player_lookup_other_platform_is_mock(api):
    body = api.get("/api/player/xbl/Pengu").json()
    assert body["mock"] is True
    assert body["data"]["stats"]["ranked"]["mmr"] == "-"


def test_player_lookup_rate_limited_is_still_200(api, fake_client):
    fake_client.queue_stats(UpstreamResponse(status_code=429, body={"retryAfter": 10}))
    response = api.get("/api/player/uplay/Pengu")
    assert response.status_code == 200
    assert response.json()["mock"] is True


# =============================================================================
# Latest video
# =============================================================================

def app_with_video_service(video_service):
    return TestClient(create_app(cache=TTLCache(), video_service=video_service))


def test_latest_video_ok():
    service = MagicMock()
    service.latest.return_value = {"cached": False, "feed": "user=ubisoft", "video": {"videoId": "abc"}}
    response = app_with_video_service(service).get("/api/youtube/latest-r6")
    assert response.status_code == 200
    assert response.json()["video"]["videoId"] == "abc"


def test_latest_video_not_found_is_404():
    service = MagicMock()
    service.latest.side_effect = NoRelevantVideoError("nothing")
    response = app_with_video_service(service).get("/api/youtube/latest-r6")
    assert response.status_code == 404
    assert response.json() == {"error": "nothing"}


def test_latest_video_mirrors_upstream_status():
    service = MagicMock()
    service.latest.side_effect = FeedUnavailableError(503)
    response = app_with_video_service(service).get("/api/youtube/latest-r6")
    assert response.status_code == 503
    assert response.json()["status"] == 503


def test_latest_video_transport_failure_is_500():
    service = MagicMock()
    service.latest.side_effect = requests.ConnectionError("dns failure")
    response = app_with_video_service(service).get("/api/youtube/latest-r6")
    assert response.status_code == 500
    assert response.json()["error"] == "Server error"
    assert "dns failure" in response.json()["details"]


def test_latest_video_unexpected_error_is_json_500():
    service = MagicMock()
    service.latest.side_effect = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
    response = app_with_video_service(service).get("/api/youtube/latest-r6")
    assert response.status_code == 500
    assert response.json()["error"] == "Server error"
    assert "invalid start byte" in response.json()["details"]


# =============================================================================
# Operator catalog
# =============================================================================

def test_operator_catalog_counts(api):
    body = api.get("/api/operators").json()
    assert body["total"] == 76
    assert body["attackers"] == 38
    assert body["defenders"] == 38
    assert len(body["data"]) == 76
    assert len({op["slug"] for op in body["data"]}) == 76


def test_operator_by_slug(api):
    response = api.get("/api/operators/thermite")
    assert response.status_code == 200
    body = response.json()
    assert body["mock"] is True
    assert body["data"]["name"] == "Thermite"
    assert body["data"]["side"] == "attacker"
    assert body["data"]["imageUrl"] == "/assets/operators/thermite.jpg"


def test_unknown_operator_is_404(api):
    response = api.get("/api/operators/not-an-operator")
    assert response.status_code == 404
    assert response.json() == {"error": "Operator not found"}


def test_cors_headers_are_sent(api):
    response = api.get("/api/health", headers={"Origin": "http://localhost:5173"})
    assert response.headers.get("access-control-allow-origin") == "*"
