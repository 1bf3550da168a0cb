from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import status

from app.routers import health


def fake_redis(ping):
    redis = MagicMock()
    redis.ping = ping
    redis.aclose = AsyncMock()
    return redis


@pytest.fixture
def readiness_backends(monkeypatch, engine):
    monkeypatch.setattr(health, "engine", engine)

    def install(redis):
        monkeypatch.setattr(health.Redis, "from_url", MagicMock(return_value=redis))
        return redis

    return install


@pytest.mark.asyncio
async def test_liveness(client):
    response = await client.get("/api/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_readiness_closes_redis_client(client, readiness_backends):
    redis = readiness_backends(fake_redis(AsyncMock(return_value=True)))

    response = await client.get("/api/health/ready")

    assert response.json() == {"status": "ok", "checks": {"redis": "ok", "database": "ok"}}
    redis.aclose.assert_awaited_once()


@pytest.mark.asyncio
async def test_readiness_degraded_when_redis_down(client, readiness_backends):
    redis = readiness_backends(fake_redis(AsyncMock(side_effect=ConnectionError("refused"))))

    response = await client.get("/api/health/ready")

    body = response.json()
    assert response.status_code == status.HTTP_200_OK
    assert body["status"] == "degraded"
    assert body["checks"]["redis"] == "fail: refused"
    assert body["checks"]["database"] == "ok"
    redis.aclose.assert_awaited_once()
