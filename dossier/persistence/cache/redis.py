"""Redis cache implementations.

Values are stored as pydantic JSON under a per-namespace key prefix.
set_if_new maps onto `SET key value NX`, which Redis applies atomically.
"""

from typing import Generic, Optional, Type, TypeVar

import logfire
import redis.asyncio as redis
from pydantic import BaseModel, ValidationError
from redis.exceptions import RedisError

from dossier.domain.error import CacheUnavailableError
from dossier.domain.model import Identity
from dossier.domain.repository import IdentityCache, KeyValueCache, StatusCache
from dossier.domain.value import ProfileStatus

M = TypeVar("M", bound=BaseModel)


def create_redis_client(url: str) -> redis.Redis:
    """Create an async Redis client.

    Args:
        url: Redis connection URL

    Returns:
        Client returning decoded strings
    """
    return redis.from_url(url, decode_responses=True)


class RedisCache(KeyValueCache[M], Generic[M]):
    """Key/value cache backed by Redis."""

    model: Type[M]

    def __init__(
        self,
        client: redis.Redis,
        key_prefix: str,
        ttl_seconds: Optional[int] = None,
    ) -> None:
        """Initialize Redis cache.

        Args:
            client: Shared async Redis client
            key_prefix: Prefix separating this namespace from others
            ttl_seconds: Expiry for written entries, None for no expiry
        """
        self._client = client
        self._prefix = key_prefix
        self._ttl = ttl_seconds

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def get(self, key: str) -> Optional[M]:
        """Read and decode a cached value."""
        try:
            raw = await self._client.get(self._key(key))
        except RedisError as e:
            raise CacheUnavailableError(f"Redis GET failed: {e}") from e
        if raw is None:
            return None
        try:
            return self.model.model_validate_json(raw)
        except ValidationError as e:
            # Unreadable entries are dropped and read as a miss
            logfire.warn(
                "Discarding unreadable cache entry", key=self._key(key), error=str(e)
            )
            try:
                await self._client.delete(self._key(key))
            except RedisError as delete_error:
                raise CacheUnavailableError(
                    f"Redis DEL failed: {delete_error}"
                ) from delete_error
            return None

    async def set(self, key: str, value: M) -> None:
        """Write a value, overwriting any current entry."""
        try:
            await self._client.set(self._key(key), value.model_dump_json(), ex=self._ttl)
        except RedisError as e:
            raise CacheUnavailableError(f"Redis SET failed: {e}") from e

    async def set_if_new(self, key: str, value: M) -> bool:
        """Write a value only if the key is absent."""
        try:
            written = await self._client.set(
                self._key(key), value.model_dump_json(), ex=self._ttl, nx=True
            )
        except RedisError as e:
            raise CacheUnavailableError(f"Redis SET NX failed: {e}") from e
        return bool(written)


class RedisIdentityCache(RedisCache[Identity], IdentityCache):
    """Identity cache keyed by user id."""

    model = Identity


class RedisStatusCache(RedisCache[ProfileStatus], StatusCache):
    """Profile status cache keyed by email."""

    model = ProfileStatus
