"""
TTL cache, TTL policies and lookup coalescing.
"""
import threading
import time

import pytest

from config.settings import Settings
from siegestats.cache import (
    DataCategory,
    RequestCoalescer,
    TTLCache,
    get_ttl_for_category,
    player_cache_keys,
)
from upstream_fakes import FakeClock


def test_get_before_expiry_returns_value(cache, clock):
    cache.set("k", {"v": 1}, ttl_seconds=60)
    clock.advance(59)
    assert cache.get("k") == {"v": 1}


def test_entry_is_still_valid_exactly_at_expiry(cache, clock):
    cache.set("k", "v", ttl_seconds=60)
    clock.advance(60)
    assert cache.get("k") == "v"


def test_get_after_expiry_returns_none_and_purges(cache, clock):
    cache.set("k", "v", ttl_seconds=60)
    clock.advance(61)
    assert cache.get("k") is None
    assert "k" not in cache
    assert len(cache) == 0


def test_expired_entry_stays_until_read(cache, clock):
    cache.set("k", "v", ttl_seconds=1)
    clock.advance(10)
    # No background sweep
    assert "k" in cache


def test_missing_key_returns_none(cache):
    assert cache.get("nope") is None


def test_default_ttl_is_five_minutes(clock):
    cache = TTLCache(clock=clock)
    cache.set("k", "v")
    clock.advance(300)
    assert cache.get("k") == "v"
    clock.advance(1)
    assert cache.get("k") is None


def test_set_overwrites_value_and_expiry(cache, clock):
    cache.set("k", "old", ttl_seconds=10)
    clock.advance(5)
    cache.set("k", "new", ttl_seconds=10)
    clock.advance(8)
    assert cache.get("k") == "new"


def test_delete_and_clear(cache):
    cache.set("a", 1)
    cache.set("b", 2)
    assert cache.delete("a") is True
    assert cache.delete("a") is False
    assert cache.clear() == 1
    assert len(cache) == 0


def test_stats_count_hits_misses_and_expirations(cache, clock):
    cache.set("k", "v", ttl_seconds=10)
    cache.get("k")
    cache.get("other")
    clock.advance(11)
    cache.get("k")

    stats = cache.get_stats()
    assert stats["hits"] == 1
    assert stats["misses"] == 2
    assert stats["expired"] == 1
    assert stats["writes"] == 1
    assert stats["hit_rate_percent"] == 33.3


def test_player_keys_are_case_insensitive():
    assert player_cache_keys("uplay", "SomePlayer") == player_cache_keys("uplay", "someplayer")


def test_player_stale_key_derives_from_fresh_key():
    fresh, stale = player_cache_keys("uplay", "Beaulo")
    assert fresh == "r6data:player:uplay:beaulo"
    assert stale == "r6data:player:uplay:beaulo:stale"


def test_ttl_classes_follow_settings():
    cfg = Settings(player_fresh_ttl_seconds=5, player_stale_ttl_seconds=50, _env_file=None)
    assert get_ttl_for_category(DataCategory.PLAYER_STATS, cfg) == (5, 50)


def test_default_ttl_classes():
    cfg = Settings(_env_file=None)
    assert get_ttl_for_category(DataCategory.PLAYER_STATS, cfg) == (600, 86400)
    assert get_ttl_for_category(DataCategory.YOUTUBE_FEED, cfg) == (600, 0)


def test_fresh_and_stale_entries_expire_independently():
    clock = FakeClock()
    cache = TTLCache(clock=clock)
    fresh, stale = player_cache_keys("uplay", "someone")
    cache.set(fresh, "payload", 600)
    cache.set(stale, "payload", 86400)
    clock.advance(601)
    assert cache.get(fresh) is None
    assert cache.get(stale) == "payload"


def test_coalescer_returns_fetch_result():
    coalescer = RequestCoalescer()
    assert coalescer.run("k", lambda: 42) == 42
    assert coalescer.active_lookups == 0


def test_coalescer_propagates_errors():
    coalescer = RequestCoalescer()

    def boom():
        raise ValueError("upstream broke")

    with pytest.raises(ValueError):
        coalescer.run("k", boom)
    assert coalescer.active_lookups == 0


def test_coalescer_shares_one_fetch_between_concurrent_callers():
    coalescer = RequestCoalescer(timeout=5)
    started = threading.Event()
    release = threading.Event()
    calls = []

    def slow_fetch():
        calls.append(1)
        started.set()
        release.wait(5)
        return "shared"

    results = []
    leader = threading.Thread(target=lambda: results.append(coalescer.run("k", slow_fetch)))
    leader.start()
    started.wait(5)

    follower = threading.Thread(target=lambda: results.append(coalescer.run("k", slow_fetch)))
    follower.start()
    deadline = time.time() + 5
    while coalescer._in_flight["k"].waiters < 1 and time.time() < deadline:
        time.sleep(0.01)
    release.set()
    leader.join(5)
    follower.join(5)

    assert results == ["shared", "shared"]
    assert len(calls) == 1
