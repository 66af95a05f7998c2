"""
Tests for volt-common Redis client.

Validates the ``RedisClient`` wrapper using a mocked ``redis.asyncio`` backend,
covering connect, close, get/set/delete, publish, subscribe, xadd, and
health_check.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from volt_common.messaging.redis_client import RedisClient


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_redis() -> AsyncMock:
    """Return a fully-mocked ``aioredis.Redis`` instance."""
    r = AsyncMock()
    r.get = AsyncMock(return_value='{"type": "slack"}')
    r.set = AsyncMock(return_value=True)
    r.delete = AsyncMock(return_value=1)
    r.publish = AsyncMock(return_value=1)
    r.ping = AsyncMock(return_value=True)
    r.xadd = AsyncMock(return_value="1234567890-0")
    r.aclose = AsyncMock()
    ps = AsyncMock()
    ps.subscribe = AsyncMock()
    ps.aclose = AsyncMock()
    r.pubsub = MagicMock(return_value=ps)
    return r


@pytest.fixture()
def client(mock_redis: AsyncMock) -> RedisClient:
    """Return a ``RedisClient`` with the internal connection pre-set."""
    c = RedisClient(url="redis://localhost:6379/0")
    c._redis = mock_redis
    return c


# ---------------------------------------------------------------------------
# Tests: lifecycle
# ---------------------------------------------------------------------------


class TestLifecycle:

    async def test_connect_creates_redis(self) -> None:
        with patch("volt_common.messaging.redis_client.aioredis.from_url") as mock_from:
            mock_from.return_value = AsyncMock()
            c = RedisClient(url="redis://localhost:6379/0")
            await c.connect()
            mock_from.assert_called_once_with("redis://localhost:6379/0", decode_responses=True)
            assert c._redis is not None

    async def test_connect_idempotent(self) -> None:
        with patch("volt_common.messaging.redis_client.aioredis.from_url") as mock_from:
            mock_from.return_value = AsyncMock()
            c = RedisClient(url="redis://localhost:6379/0")
            await c.connect()
            await c.connect()
            mock_from.assert_called_once()

    async def test_close(self, client: RedisClient, mock_redis: AsyncMock) -> None:
        await client.subscribe("volt:alerts")
        pubsub = mock_redis.pubsub.return_value
        await client.close()
        pubsub.aclose.assert_awaited_once()
        mock_redis.aclose.assert_awaited_once()
        assert client._redis is None

    def test_redis_property_raises_when_not_connected(self) -> None:
        c = RedisClient(url="redis://localhost:6379/0")
        with pytest.raises(RuntimeError, match="not connected"):
            _ = c.redis


# ---------------------------------------------------------------------------
# Tests: key–value
# ---------------------------------------------------------------------------


class TestKeyValue:

    async def test_get(self, client: RedisClient, mock_redis: AsyncMock) -> None:
        assert await client.get("volt:alerter:k") == '{"type": "slack"}'
        mock_redis.get.assert_awaited_once_with("volt:alerter:k")

    async def test_set(self, client: RedisClient, mock_redis: AsyncMock) -> None:
        await client.set("k", "v")
        mock_redis.set.assert_awaited_once_with("k", "v")

    async def test_delete_reports_existence(self, client: RedisClient, mock_redis: AsyncMock) -> None:
        assert await client.delete("k") is True
        mock_redis.delete = AsyncMock(return_value=0)
        assert await client.delete("k") is False


# ---------------------------------------------------------------------------
# Tests: pub/sub and streams
# ---------------------------------------------------------------------------


class TestMessaging:

    async def test_publish_dict_is_json_encoded(self, client: RedisClient, mock_redis: AsyncMock) -> None:
        assert await client.publish("volt:alerts", {"type": "warning"}) == 1
        mock_redis.publish.assert_awaited_once_with("volt:alerts", '{"type": "warning"}')

    async def test_publish_string_passthrough(self, client: RedisClient, mock_redis: AsyncMock) -> None:
        await client.publish("volt:alerts", "raw")
        mock_redis.publish.assert_awaited_once_with("volt:alerts", "raw")

    async def test_subscribe(self, client: RedisClient, mock_redis: AsyncMock) -> None:
        ps = await client.subscribe("a", "b")
        ps.subscribe.assert_awaited_once_with("a", "b")

    async def test_xadd_with_maxlen(self, client: RedisClient, mock_redis: AsyncMock) -> None:
        entry = await client.xadd("volt:events", {"type": "error"}, maxlen=100)
        assert entry == "1234567890-0"
        mock_redis.xadd.assert_awaited_once_with(
            "volt:events", {"type": "error"}, maxlen=100, approximate=True
        )


class TestHealthCheck:

    async def test_ping_ok(self, client: RedisClient) -> None:
        assert await client.health_check() is True

    async def test_ping_failure(self, client: RedisClient, mock_redis: AsyncMock) -> None:
        mock_redis.ping = AsyncMock(side_effect=ConnectionError("down"))
        assert await client.health_check() is False
