"""Pytest configuration and fixtures."""

from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from hashlink.common.logging_config import setup_logging
from hashlink.database.base import URLStoreBase
from hashlink.database.memory import MemoryURLStore
from hashlink.resolver import UniquenessResolver
from hashlink.service import URLShortenerService
from hashlink.shortcode import ShortCodeGenerator
from web_app import create_app

BASE_URL = "http://testserver"


class UntouchableStore(URLStoreBase):
    """Store that fails the test on any access."""

    backend_name = "untouchable"

    def _fail(self, *args, **kwargs):
        pytest.fail("store was queried")

    exists_by_code = insert = find_by_code = find_by_original_url = _fail
    increment_clicks = list_recent = get_statistics = _fail

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        pass


class FakeRedis:
    """Minimal async stand-in for redis.asyncio.Redis."""

    def __init__(self):
        self.data = {}

    async def get(self, key):
        return self.data.get(key)

    async def setex(self, key, ttl, value):
        self.data[key] = value

    async def ping(self):
        return True

    async def aclose(self):
        pass


@pytest.fixture
def untouchable_store():
    return UntouchableStore()


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def store() -> MemoryURLStore:
    return MemoryURLStore()


@pytest.fixture
def short_code_generator():
    return ShortCodeGenerator()


@pytest.fixture
def resolver(short_code_generator, logger):
    return UniquenessResolver(generator=short_code_generator, logger=logger)


@pytest.fixture
async def service(store, resolver, logger) -> AsyncGenerator[URLShortenerService, None]:
    """Create service instance on the in-memory store."""
    service = URLShortenerService(
        store=store,
        base_url=BASE_URL,
        resolver=resolver,
        logger=logger,
    )
    yield service
    await service.close()


@pytest.fixture
def config():
    return Config(store_backend="memory", base_url=BASE_URL)


@pytest.fixture
def app(service, config, logger):
    """Create test FastAPI app."""
    return create_app(service_instance=service, config=config, logger=logger)


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE_URL) as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/a/b",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
