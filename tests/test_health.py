"""
Health and version endpoints
"""
from fastapi.testclient import TestClient
from siegestats.main import app

client = TestClient(app)


def test_health_endpoint_returns_200():
    """Test that /api/health returns HTTP 200"""
    response = client.get("/api/health")
    assert response.status_code == 200


def test_health_endpoint_returns_ok():
    """Test that /api/health returns ok: true"""
    response = client.get("/api/health")
    assert response.json() == {"ok": True}


def test_version_endpoint_reports_name():
    response = client.get("/version")
    assert response.status_code == 200
    assert response.json()["name"] == "Siege Stats"


def test_cache_stats_endpoint_returns_counters():
    response = client.get("/cache/stats")
    data = response.json()
    assert response.status_code == 200
    assert "entries" in data
    assert "hit_rate_percent" in data
