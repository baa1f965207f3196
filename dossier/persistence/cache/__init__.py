"""Cache implementations."""

from .inmemory import InMemoryCache, InMemoryIdentityCache, InMemoryStatusCache
from .redis import (
    RedisCache,
    RedisIdentityCache,
    RedisStatusCache,
    create_redis_client,
)

__all__ = [
    "InMemoryCache",
    "InMemoryIdentityCache",
    "InMemoryStatusCache",
    "RedisCache",
    "RedisIdentityCache",
    "RedisStatusCache",
    "create_redis_client",
]
