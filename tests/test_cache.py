import json

import pytest

from zoomclient.api.cache import CacheEntryOptions, MemoryTokenCache, RedisTokenCache, build_token_cache
from zoomclient.config.settings import ZoomSettings

OPTIONS = CacheEntryOptions(absolute_ttl=55 * 60, sliding_ttl=15 * 60)


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class FakeRedis:
    """Subset of the redis client used by RedisTokenCache (TTL is recorded, not enforced)."""

    def __init__(self):
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value, ex=None):
        self.data[key] = value
        self.ttls[key] = ex

    def expire(self, key, seconds):
        self.ttls[key] = seconds

    def delete(self, key):
        self.data.pop(key, None)
        self.ttls.pop(key, None)


class TestMemoryTokenCache:

    def test_miss_returns_none(self):
        assert MemoryTokenCache().try_get("missing") is None

    def test_hit_within_sliding_window(self):
        clock = FakeClock()
        cache = MemoryTokenCache(clock=clock)
        cache.set("k", "bearer a", OPTIONS)

        clock.now = 14 * 60
        assert cache.try_get("k") == "bearer a"

    def test_sliding_expiration_without_access(self):
        clock = FakeClock()
        cache = MemoryTokenCache(clock=clock)
        cache.set("k", "bearer a", OPTIONS)

        clock.now = 15 * 60
        assert cache.try_get("k") is None
        assert len(cache) == 0

    def test_access_extends_sliding_but_not_absolute(self):
        clock = FakeClock()
        cache = MemoryTokenCache(clock=clock)
        cache.set("k", "bearer a", OPTIONS)

        for minute in range(14, 55, 14):
            clock.now = minute * 60
            assert cache.try_get("k") == "bearer a"

        clock.now = 55 * 60
        assert cache.try_get("k") is None

    def test_absolute_only(self):
        clock = FakeClock()
        cache = MemoryTokenCache(clock=clock)
        cache.set("k", "v", CacheEntryOptions(absolute_ttl=10))

        clock.now = 9.9
        assert cache.try_get("k") == "v"
        clock.now = 10
        assert cache.try_get("k") is None

    def test_set_replaces_value(self):
        cache = MemoryTokenCache()
        cache.set("k", "old", OPTIONS)
        cache.set("k", "new", OPTIONS)
        assert cache.try_get("k") == "new"

    def test_remove(self):
        cache = MemoryTokenCache()
        cache.set("k", "v", OPTIONS)
        cache.remove("k")
        cache.remove("never-set")
        assert cache.try_get("k") is None


class TestRedisTokenCache:

    @pytest.fixture
    def redis_client(self):
        return FakeRedis()

    @pytest.fixture
    def clock(self):
        return FakeClock(now=1_700_000_000.0)

    @pytest.fixture
    def cache(self, redis_client, clock):
        return RedisTokenCache(redis_client, clock=clock)

    def test_set_stores_value_with_sliding_ttl(self, cache, redis_client, clock):
        cache.set("acc:client", "bearer a", OPTIONS)

        raw = json.loads(redis_client.data["zoom:token:acc:client"])
        assert raw["value"] == "bearer a"
        assert raw["expires_at"] == clock.now + 55 * 60
        assert redis_client.ttls["zoom:token:acc:client"] == 15 * 60

    def test_get_refreshes_sliding_ttl(self, cache, redis_client, clock):
        cache.set("k", "bearer a", OPTIONS)
        redis_client.ttls["zoom:token:k"] = 5

        assert cache.try_get("k") == "bearer a"
        assert redis_client.ttls["zoom:token:k"] == 15 * 60

    def test_sliding_ttl_capped_by_absolute(self, cache, redis_client, clock):
        cache.set("k", "bearer a", OPTIONS)
        clock.now += 50 * 60

        assert cache.try_get("k") == "bearer a"
        assert redis_client.ttls["zoom:token:k"] == 5 * 60

    def test_absolute_expiration(self, cache, redis_client, clock):
        cache.set("k", "bearer a", OPTIONS)
        clock.now += 55 * 60

        assert cache.try_get("k") is None
        assert "zoom:token:k" not in redis_client.data

    def test_corrupted_entry_is_dropped(self, cache, redis_client):
        redis_client.data["zoom:token:k"] = "{not json"
        assert cache.try_get("k") is None
        assert "zoom:token:k" not in redis_client.data

    def test_remove(self, cache, redis_client):
        cache.set("k", "bearer a", OPTIONS)
        cache.remove("k")
        assert cache.try_get("k") is None


def test_build_token_cache_defaults_to_memory():
    settings = ZoomSettings(_env_file=None, token_cache_url=None)
    assert isinstance(build_token_cache(settings), MemoryTokenCache)


def test_build_token_cache_uses_redis_url():
    settings = ZoomSettings(_env_file=None, token_cache_url="redis://localhost:6379/5")
    cache = build_token_cache(settings)
    assert isinstance(cache, RedisTokenCache)
