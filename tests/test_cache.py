"""Tests for the Redis record cache."""

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from hashlink.database.cache import RedisCache
from hashlink.database.models import URLRecord


class BrokenRedis:
    async def ping(self):
        raise RedisConnectionError("connection refused")

    async def get(self, key):
        raise RedisConnectionError("connection refused")

    async def setex(self, key, ttl, value):
        raise RedisConnectionError("connection refused")

    async def aclose(self):
        pass


@pytest.mark.asyncio
class TestRedisCache:
    """Test RedisCache."""

    async def test_disabled_without_url(self):
        cache = RedisCache()
        await cache.connect()

        assert not cache.enabled
        assert await cache.get_record("abc123") is None

    async def test_round_trip(self, fake_redis):
        cache = RedisCache(client=fake_redis, ttl_seconds=60)
        record = URLRecord(original_url="https://example.com", short_code="abc123", short_url="http://t/abc123", clicks=4)

        assert await cache.set_record(record)
        cached = await cache.get_record("abc123")

        assert cached == record
        assert "hashlink:url:abc123" in fake_redis.data

    async def test_unreadable_entry_is_a_miss(self, fake_redis):
        cache = RedisCache(client=fake_redis)
        fake_redis.data["hashlink:url:abc123"] = "{not json"

        assert await cache.get_record("abc123") is None

    async def test_failed_connect_disables_cache(self):
        cache = RedisCache(client=BrokenRedis())
        await cache.connect()

        assert not cache.enabled
        assert await cache.get_record("abc123") is None

    async def test_errors_are_misses(self):
        cache = RedisCache(client=BrokenRedis())
        record = URLRecord(original_url="https://example.com", short_code="abc123", short_url="http://t/abc123")

        assert await cache.get_record("abc123") is None
        assert not await cache.set_record(record)
        assert not await cache.ping()
