"""
Shared fixtures: a controllable clock, fresh caches, and an in-memory
stand-in for the r6data client so no test touches the network.
"""
import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from siegestats.cache import TTLCache
from siegestats.main import create_app
from siegestats.player_service import PlayerLookupService
from upstream_fakes import FakeClock, FakeR6DataClient


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def test_settings():
    return Settings(r6data_api_key="test-key", _env_file=None)


@pytest.fixture
def cache(clock):
    return TTLCache(clock=clock)


@pytest.fixture
def fake_client():
    return FakeR6DataClient()


@pytest.fixture
def player_service(cache, fake_client, test_settings, clock):
    return PlayerLookupService(cache=cache, client=fake_client, cfg=test_settings, clock=clock)


@pytest.fixture
def api(test_settings, cache, fake_client):
    """TestClient over an app wired to the fake upstream and a fresh cache."""
    application = create_app(cfg=test_settings, cache=cache, stats_client=fake_client)
    return TestClient(application)
