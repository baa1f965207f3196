"""Cache infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
import redis.asyncio as redis

from dossier.config import CacheSettings
from dossier.domain.repository import IdentityCache, StatusCache
from dossier.persistence.cache import (
    RedisIdentityCache,
    RedisStatusCache,
    create_redis_client,
)
from dossier.util.di.base import ProviderBase
from dossier.util.observability import instrument_redis


class CacheProvider(ProviderBase):
    """Cache component base."""

    __mock_component__ = "cache"


class ProdCacheProvider(CacheProvider):
    """Production cache provider using Redis.

    One client is shared for the application lifetime; both namespaces
    live in the same Redis database under different key prefixes.
    """

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_redis_client(
        self, cache_settings: CacheSettings
    ) -> AsyncIterator[redis.Redis]:
        """Provide Redis client, closed when the container closes."""
        instrument_redis()
        client = create_redis_client(cache_settings.url)
        yield client
        await client.aclose()
        logfire.info("Redis client closed")

    @provide(scope=Scope.APP)
    def get_identity_cache(
        self, client: redis.Redis, cache_settings: CacheSettings
    ) -> IdentityCache:
        """Provide identity cache."""
        return RedisIdentityCache(
            client,
            key_prefix=cache_settings.identity_prefix,
            ttl_seconds=cache_settings.ttl_seconds,
        )

    @provide(scope=Scope.APP)
    def get_status_cache(
        self, client: redis.Redis, cache_settings: CacheSettings
    ) -> StatusCache:
        """Provide profile status cache."""
        return RedisStatusCache(
            client,
            key_prefix=cache_settings.status_prefix,
            ttl_seconds=cache_settings.ttl_seconds,
        )
