"""
Data access layer for alerter configuration records.

Alerter configs live in Redis as JSON strings under
``<alerter_config_prefix><key>``. The DAL deals in raw JSON; decoding and
validation belong to the alerter.
"""

from __future__ import annotations

from redis.exceptions import RedisError

from volt_common.messaging.redis_client import RedisClient
from volt_common.models import AlerterConfig


class DalError(Exception):
    """The config store could not be reached or returned an error."""


class KeyNotFoundError(DalError):
    """The requested key does not exist in the config store."""


class DalClient:
    """Read and write alerter configs in the config store.

    Args:
        redis: Connected :class:`RedisClient`.
        prefix: Key prefix for alerter configs.
    """

    def __init__(self, redis: RedisClient, *, prefix: str = "volt:alerter:") -> None:
        self._redis = redis
        self.prefix = prefix

    def _full_key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    async def fetch_alerter_config(self, key: str) -> str:
        """Return the raw JSON config stored for alerter *key*.

        Raises:
            KeyNotFoundError: No record exists for *key*.
            DalError: The store is unreachable.
        """
        full_key = self._full_key(key)
        try:
            value = await self._redis.get(full_key)
        except (RedisError, RuntimeError) as exc:
            raise DalError(f"Unable to fetch '{full_key}': {exc}") from exc
        if value is None:
            raise KeyNotFoundError(f"No alerter config found at '{full_key}'")
        return value

    async def put_alerter_config(self, key: str, config: AlerterConfig) -> None:
        """Store *config* under alerter *key*, replacing any existing record."""
        try:
            await self._redis.set(self._full_key(key), config.model_dump_json())
        except (RedisError, RuntimeError) as exc:
            raise DalError(f"Unable to store alerter config '{key}': {exc}") from exc

    async def delete_alerter_config(self, key: str) -> bool:
        """Remove alerter *key*; return ``True`` if it existed."""
        try:
            return await self._redis.delete(self._full_key(key))
        except (RedisError, RuntimeError) as exc:
            raise DalError(f"Unable to delete alerter config '{key}': {exc}") from exc
