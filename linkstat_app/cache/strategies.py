"""
Cache strategies using Strategy Pattern.
Allows switching between different cache backends (Redis, In-Memory, Null).

The cache is advisory: every strategy treats a backend failure as a miss
(``get``) or as an unsuccessful write (``set``) and never raises.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional


logger = logging.getLogger(__name__)


class CacheStrategy(ABC):
    """
    Abstract base class for cache strategies.

    All methods are async because cache operations involve I/O (network for Redis).
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Get value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None on miss or backend failure
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        """
        Set value in cache with TTL (Time To Live).

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds (default: 1 hour)

        Returns:
            True if successful, False otherwise
        """
        pass


class RedisCache(CacheStrategy):
    """
    Redis cache backed by an ``redis.asyncio`` client.

    Shared across requests; the client owns its own connection pool.
    """

    def __init__(self, redis_client):
        """
        Args:
            redis_client: ``redis.asyncio.Redis`` instance
        """
        self.redis = redis_client

    async def get(self, key: str) -> Optional[str]:
        try:
            value = await self.redis.get(key)
        except Exception as e:
            logger.warning("Redis get failed for %s: %s", key, e)
            return None
        if value is None:
            return None
        return value.decode("utf-8") if isinstance(value, bytes) else value

    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        try:
            return bool(await self.redis.set(key, value, ex=ttl))
        except Exception as e:
            logger.warning("Redis set failed for %s: %s", key, e)
            return False


class InMemoryCache(CacheStrategy):
    """
    In-memory cache using a Python dict.

    Good for development and testing. Not shared between processes and
    TTL is not enforced.
    """

    def __init__(self):
        self._cache: Dict[str, str] = {}

    async def get(self, key: str) -> Optional[str]:
        return self._cache.get(key)

    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        self._cache[key] = value
        return True


class NullCache(CacheStrategy):
    """
    Null Object Pattern - cache that does nothing.

    Every lookup is a miss, so every resolution goes to the store.
    """

    async def get(self, key: str) -> Optional[str]:
        return None

    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        return True
