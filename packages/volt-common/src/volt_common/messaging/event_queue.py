"""
Cluster event queue client.

Operational events (alert failures, rejected messages, ...) are appended to
a capped Redis Stream so that operators and the UI can see what happened on
every member. Writes are fire-and-forget: a failing Redis never propagates
into the caller.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog
from redis.exceptions import RedisError

from volt_common.messaging.redis_client import RedisClient

logger = structlog.get_logger()


class EventQueueClient:
    """Append leveled text entries to the cluster event stream.

    Args:
        redis: Connected :class:`RedisClient`.
        member_id: Identity stamped on every entry.
        stream: Stream key name.
        maxlen: Approximate cap on stream length.
    """

    def __init__(
        self,
        redis: RedisClient,
        member_id: str,
        *,
        stream: str = "volt:events",
        maxlen: int = 10_000,
    ) -> None:
        self._redis = redis
        self.member_id = member_id
        self.stream = stream
        self.maxlen = maxlen

    async def add(self, kind: str, message: str) -> str | None:
        """Append an entry of type *kind*.

        Returns:
            The stream entry ID, or ``None`` if the write failed.
        """
        fields = {
            "type": kind,
            "member_id": self.member_id,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        try:
            return await self._redis.xadd(self.stream, fields, maxlen=self.maxlen)
        except (RedisError, RuntimeError) as exc:
            logger.warning("event_queue_write_failed", kind=kind, error=str(exc))
            return None

    async def add_with_error_log(self, kind: str, message: str) -> str | None:
        """Log *message* at error level, then append it to the queue."""
        logger.error(message, event_type=kind)
        return await self.add(kind, message)
