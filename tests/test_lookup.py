"""Tests for short code lookup."""

import pytest

from hashlink.database.cache import RedisCache
from hashlink.database.memory import MemoryURLStore
from hashlink.database.models import URLRecord
from hashlink.errors import StoreError
from hashlink.lookup import LookupService, LookupStatus


class FlakyClickStore(MemoryURLStore):
    async def increment_clicks(self, short_code: str) -> None:
        raise StoreError("Store unavailable during increment_clicks")


def make_record(code="abc123", url="https://example.com/a/b") -> URLRecord:
    return URLRecord(original_url=url, short_code=code, short_url=f"http://testserver/{code}")


@pytest.mark.asyncio
class TestLookupService:
    """Test LookupService."""

    @pytest.mark.parametrize("code", ["ab", "", "abcdefg", "abc-12", "abc 12", "abc_12", "ábcdef"])
    async def test_invalid_format_never_touches_store(self, code, untouchable_store):
        lookup = LookupService(store=untouchable_store)

        result = await lookup.resolve(code)

        assert result.status is LookupStatus.INVALID_FORMAT
        assert result.record is None
        assert "6 characters" in result.detail

    async def test_not_found(self):
        lookup = LookupService(store=MemoryURLStore())

        result = await lookup.resolve("ZZZZZZ")

        assert result.status is LookupStatus.NOT_FOUND
        assert not result.found

    async def test_found(self):
        store = MemoryURLStore()
        await store.insert(make_record())
        lookup = LookupService(store=store)

        result = await lookup.resolve("abc123")

        assert result.found
        assert result.record.original_url == "https://example.com/a/b"

    async def test_three_resolutions_add_three_clicks(self):
        store = MemoryURLStore()
        await store.insert(make_record())
        lookup = LookupService(store=store)

        for _ in range(3):
            await lookup.resolve("abc123")
        await lookup.wait_for_pending()

        assert (await store.find_by_code("abc123")).clicks == 3

    async def test_click_not_counted_when_disabled(self):
        store = MemoryURLStore()
        await store.insert(make_record())
        lookup = LookupService(store=store)

        await lookup.resolve("abc123", count_click=False)
        await lookup.wait_for_pending()

        assert (await store.find_by_code("abc123")).clicks == 0

    async def test_click_failure_does_not_fail_lookup(self):
        store = FlakyClickStore()
        await store.insert(make_record())
        lookup = LookupService(store=store)

        result = await lookup.resolve("abc123")
        await lookup.wait_for_pending()

        assert result.found

    async def test_store_errors_propagate(self):
        class DownStore(MemoryURLStore):
            async def find_by_code(self, short_code):
                raise StoreError("Store unavailable during find_by_code")

        with pytest.raises(StoreError):
            await LookupService(store=DownStore()).resolve("abc123")


@pytest.mark.asyncio
class TestLookupCache:
    """Test the optional read-through cache."""

    async def test_found_record_is_cached(self, fake_redis):
        store = MemoryURLStore()
        await store.insert(make_record())
        cache = RedisCache(client=fake_redis)
        lookup = LookupService(store=store, cache=cache)

        await lookup.resolve("abc123", count_click=False)

        cached = await cache.get_record("abc123")
        assert cached.original_url == "https://example.com/a/b"

    async def test_cache_hit_skips_store_but_counts_click(self, fake_redis):
        cache = RedisCache(client=fake_redis)
        await cache.set_record(make_record(code="xyz789", url="https://cached.example.com"))

        class ReadlessStore(MemoryURLStore):
            async def find_by_code(self, short_code):
                pytest.fail("store read on cache hit")

            async def increment_clicks(self, short_code):
                self.incremented = short_code

        readless = ReadlessStore()
        lookup = LookupService(store=readless, cache=cache)

        result = await lookup.resolve("xyz789")
        await lookup.wait_for_pending()

        assert result.record.original_url == "https://cached.example.com"
        assert readless.incremented == "xyz789"

    async def test_misses_are_not_cached(self, fake_redis):
        cache = RedisCache(client=fake_redis)
        lookup = LookupService(store=MemoryURLStore(), cache=cache)

        result = await lookup.resolve("ZZZZZZ")

        assert result.status is LookupStatus.NOT_FOUND
        assert cache.client.data == {}
