"""
Redis client wrapper for the alert pipeline.

One async connection serves three roles: key–value access for the alerter
config store, stream appends for the event queue, and pub/sub for the
checker → alerter message channel.
"""

from __future__ import annotations

import json
from typing import Any

import redis.asyncio as aioredis

from volt_common.config import get_settings


class RedisClient:
    """Async Redis wrapper with get/set, publish/subscribe, and xadd helpers.

    Args:
        url: Redis connection URL.  Falls back to ``Settings.redis_url``.
    """

    def __init__(self, url: str | None = None) -> None:
        self._url = url or get_settings().redis_url
        self._redis: aioredis.Redis | None = None
        self._pubsub: aioredis.client.PubSub | None = None

    # ── lifecycle ──

    async def connect(self) -> None:
        """Establish the Redis connection (idempotent)."""
        if self._redis is None:
            self._redis = aioredis.from_url(
                self._url,
                decode_responses=True,
            )

    async def close(self) -> None:
        """Close the pubsub and the connection, if open."""
        if self._pubsub is not None:
            await self._pubsub.aclose()
            self._pubsub = None
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None

    @property
    def redis(self) -> aioredis.Redis:
        """Return the underlying ``aioredis.Redis`` instance.

        Raises:
            RuntimeError: If ``connect()`` has not been called.
        """
        if self._redis is None:
            raise RuntimeError("RedisClient is not connected. Call connect() first.")
        return self._redis

    # ── key–value helpers ──

    async def get(self, key: str) -> str | None:
        """Return the string stored at *key*, or ``None`` if absent."""
        value: str | None = await self.redis.get(key)
        return value

    async def set(self, key: str, value: str) -> None:
        """Store *value* at *key* without expiry."""
        await self.redis.set(key, value)

    async def delete(self, key: str) -> bool:
        """Delete *key*; return ``True`` if it existed."""
        removed: int = await self.redis.delete(key)
        return removed > 0

    # ── pub/sub helpers ──

    async def publish(self, channel: str, message: dict[str, Any] | str) -> int:
        """Publish a message to a pub/sub *channel*.

        Args:
            channel: Channel name.
            message: Payload (a dict is JSON-serialised automatically).

        Returns:
            Number of subscribers that received the message.
        """
        payload = json.dumps(message) if isinstance(message, dict) else message
        result: int = await self.redis.publish(channel, payload)
        return result

    async def subscribe(self, *channels: str) -> aioredis.client.PubSub:
        """Subscribe to one or more pub/sub *channels*.

        Returns:
            A ``PubSub`` instance that can be iterated for incoming messages.
        """
        self._pubsub = self.redis.pubsub()
        await self._pubsub.subscribe(*channels)
        return self._pubsub

    # ── stream helpers ──

    async def xadd(
        self,
        stream: str,
        fields: dict[str, str],
        maxlen: int | None = None,
    ) -> str:
        """Append an entry to a Redis Stream.

        Args:
            stream: Stream key name.
            fields: Field–value mapping for the entry.
            maxlen: Optional maximum stream length (approximate trimming).

        Returns:
            The auto-generated entry ID.
        """
        entry_id: str = await self.redis.xadd(  # type: ignore[assignment]
            stream,
            fields,
            maxlen=maxlen,
            approximate=True if maxlen else False,
        )
        return entry_id

    # ── health check ──

    async def health_check(self) -> bool:
        """Verify connectivity by issuing a ``PING``.

        Returns:
            ``True`` if Redis responds, ``False`` otherwise.
        """
        try:
            return bool(await self.redis.ping())
        except Exception:  # noqa: BLE001
            return False
