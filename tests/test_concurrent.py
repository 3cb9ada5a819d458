"""Tests that concurrent requests keep short codes unique and clicks exact."""

import asyncio

import pytest
from httpx import ASGITransport, AsyncClient

from hashlink.database.memory import MemoryURLStore
from hashlink.service import URLShortenerService
from web_app import create_app


class GatedInsertStore(MemoryURLStore):
    """Holds every insert until `callers` of them are waiting, then lets them race."""

    def __init__(self, callers: int):
        super().__init__()
        self.callers = callers
        self.arrived = 0
        self.insert_attempts = 0
        self.gate = asyncio.Event()

    async def insert(self, record):
        self.insert_attempts += 1
        if not self.gate.is_set():
            self.arrived += 1
            if self.arrived >= self.callers:
                self.gate.set()
            await self.gate.wait()
        return await super().insert(record)


@pytest.mark.asyncio
class TestConcurrentRequests:
    """Many simultaneous requests against one app."""

    async def test_concurrent_shorten_distinct_urls(self, client):
        """Different URLs created concurrently all get unique codes."""
        urls = [f"https://example.com/page_{i}" for i in range(30)]
        responses = await asyncio.gather(
            *(client.post("/api/shorten", json={"url": url}) for url in urls)
        )

        codes = []
        for url, r in zip(urls, responses):
            assert r.status_code == 200, r.text
            assert r.json()["original_url"] == url
            codes.append(r.json()["short_code"])

        assert len(codes) == len(set(codes))

    async def test_concurrent_shorten_same_url(self, config, logger):
        """Creates for one URL that all reach insert together answer with the winner's record."""
        callers = 10
        store = GatedInsertStore(callers)
        service = URLShortenerService(store=store, base_url="http://testserver", logger=logger)
        app = create_app(service_instance=service, config=config, logger=logger)
        url = "https://example.com/contended"

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
            responses = await asyncio.wait_for(
                asyncio.gather(*(ac.post("/api/shorten", json={"url": url}) for _ in range(callers))),
                timeout=5,
            )

        assert all(r.status_code == 200 for r in responses)
        assert len({r.json()["short_code"] for r in responses}) == 1
        assert store.insert_attempts == callers
        assert (await store.get_statistics()).total_urls == 1

    async def test_concurrent_redirects_count_every_click(self, client, service):
        created = await client.post("/api/shorten", json={"url": "https://example.com/redirect-target"})
        short_code = created.json()["short_code"]

        responses = await asyncio.gather(
            *(client.get(f"/{short_code}", follow_redirects=False) for _ in range(20))
        )
        await service.wait_for_pending()

        for r in responses:
            assert r.status_code == 302
            assert r.headers["location"] == "https://example.com/redirect-target"

        info = await client.get(f"/api/urls/{short_code}")
        assert info.json()["clicks"] == 20

    async def test_concurrent_health_requests(self, client):
        responses = await asyncio.gather(*(client.get("/api/health") for _ in range(25)))

        assert all(r.status_code == 200 for r in responses)
