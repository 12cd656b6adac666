"""
@file cache.py
@brief Redis cache manager singleton
@details
Provides a unified interface for Redis operations, connection management,
and a caching decorator for read-mostly endpoints (the area listings).
Uses a global singleton for the Redis client. When Redis is unreachable
every operation degrades to a cache miss.

The validation pipeline itself never reads from this cache; it always
sees the current area rows.

@author PAFS Project
@date 2026-01-12
@version 1.0
@license AGPL-3.0
"""

import os
import json
import logging
from typing import Optional, Any, Callable, Iterable
from functools import wraps
import redis.asyncio as redis

logger = logging.getLogger(__name__)

## @brief Seconds area listings stay cached
AREA_CACHE_TTL = int(os.getenv("AREA_CACHE_TTL", "3600"))


class RedisCache:
    """
    @brief Singleton wrapper for Async Redis client
    """
    _instance: Optional['RedisCache'] = None
    client: Optional[redis.Redis] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(RedisCache, cls).__new__(cls)
        return cls._instance

    async def connect(self):
        """
        @brief Initialize Redis connection pool
        @details
        Connects using REDIS_URL environment variable.
        """
        redis_url = os.getenv("REDIS_URL", "redis://localhost:6379/0")
        try:
            self.client = redis.from_url(
                redis_url,
                encoding="utf-8",
                decode_responses=True
            )
            await self.client.ping()
            logger.info(f"Connected to Redis at {redis_url}")
        except Exception as e:
            logger.error(f"Failed to connect to Redis: {e}")
            self.client = None

    async def close(self):
        """
        @brief Close Redis connection
        """
        if self.client:
            await self.client.close()
            logger.info("Redis connection closed")

    async def get(self, key: str) -> Optional[Any]:
        """
        @brief Retrieve value from cache
        """
        if not self.client:
            return None
        try:
            value = await self.client.get(key)
            if value:
                return json.loads(value)
            return None
        except Exception as e:
            logger.warning(f"Redis get error for {key}: {e}")
            return None

    async def set(self, key: str, value: Any, ttl: int = AREA_CACHE_TTL):
        """
        @brief Set value in cache with TTL
        """
        if not self.client:
            return
        try:
            serialized = json.dumps(value, default=str)
            await self.client.setex(key, ttl, serialized)
        except Exception as e:
            logger.warning(f"Redis set error for {key}: {e}")


# Global instance
cache = RedisCache()


def cache_key(prefix: str, name: str, args: Iterable[Any], kwargs: dict, skip: Iterable[str] = ()) -> str:
    """
    @brief Build a cache key from a function's name and arguments

    @details
    Keyword arguments named in `skip` (sessions, stores) are left out.
    None values are left out so "no filter" has a single key.
    """
    skipped = set(skip)
    arg_str = ":".join(str(a) for a in args)
    kwarg_str = ":".join(
        f"{k}={v}" for k, v in sorted(kwargs.items()) if k not in skipped and v is not None
    )
    return f"{prefix}:{name}:{arg_str}:{kwarg_str}"


def cache_response(ttl: int = AREA_CACHE_TTL, key_prefix: str = "", skip: Iterable[str] = ("db",)):
    """
    @brief Decorator for caching async function results
    @details
    Generates a cache key based on function arguments.
    Requires the decorated function to be called with keyword arguments
    for anything that should not be part of the key, and to return
    JSON-serializable data.
    """
    def decorator(func: Callable):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            key = cache_key(key_prefix, func.__name__, args, kwargs, skip)

            cached_val = await cache.get(key)
            if cached_val is not None:
                logger.debug(f"Cache hit for {key}")
                return cached_val

            result = await func(*args, **kwargs)

            await cache.set(key, result, ttl)

            return result
        return wrapper
    return decorator
