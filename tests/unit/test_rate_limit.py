"""Unit tests for the Redis fixed-window rate limiter."""

from collections import defaultdict

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from config.settings import settings
from src.ds_gateway.middleware import rate_limit


class FakeRedis:
    def __init__(self) -> None:
        self.counts: dict[str, int] = defaultdict(int)
        self.expiry: dict[str, int] = {}

    async def incr(self, key: str) -> int:
        self.counts[key] += 1
        return self.counts[key]

    async def expire(self, key: str, seconds: int) -> None:
        self.expiry[key] = seconds

    async def ttl(self, key: str) -> int:
        return self.expiry.get(key, -1)


@pytest.fixture
def redis(monkeypatch) -> FakeRedis:
    fake = FakeRedis()

    async def _get_redis() -> FakeRedis:
        return fake

    monkeypatch.setattr(rate_limit, "get_redis", _get_redis)
    monkeypatch.setattr(settings, "RATE_LIMIT_PER_MINUTE", 2)
    return fake


@pytest.fixture
async def client(redis: FakeRedis):
    app = FastAPI()
    app.add_middleware(rate_limit.RateLimitMiddleware)

    @app.post("/api/v1/markets/{market_id}/buy")
    async def buy(market_id: int) -> dict[str, int]:
        return {"market_id": market_id}

    @app.get("/api/v1/markets")
    async def markets() -> list[int]:
        return []

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
async def test_limit_enforced_per_window(client: AsyncClient, redis: FakeRedis) -> None:
    assert (await client.post("/api/v1/markets/0/buy")).status_code == 200
    assert (await client.post("/api/v1/markets/1/buy")).status_code == 200
    resp = await client.post("/api/v1/markets/0/buy")
    assert resp.status_code == 429
    assert resp.json()["code"] == 9001
    assert resp.headers["Retry-After"] == "60"
    assert redis.expiry == {"ratelimit:127.0.0.1:markets": 60}


@pytest.mark.asyncio
async def test_reads_not_counted(client: AsyncClient, redis: FakeRedis) -> None:
    for _ in range(5):
        assert (await client.get("/api/v1/markets")).status_code == 200
    assert redis.counts == {}


@pytest.mark.asyncio
async def test_forwarded_for_keys_by_client(client: AsyncClient, redis: FakeRedis) -> None:
    await client.post("/api/v1/markets/0/buy", headers={"X-Forwarded-For": "10.0.0.7, 10.0.0.1"})
    assert "ratelimit:10.0.0.7:markets" in redis.counts


@pytest.mark.asyncio
async def test_disabled_when_zero(client: AsyncClient, redis: FakeRedis, monkeypatch) -> None:
    monkeypatch.setattr(settings, "RATE_LIMIT_PER_MINUTE", 0)
    for _ in range(5):
        assert (await client.post("/api/v1/markets/0/buy")).status_code == 200
    assert redis.counts == {}
