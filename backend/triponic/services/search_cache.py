"""Search cache: TTL-bounded key/value store for expensive external lookups."""

import json
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import redis.asyncio as redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

TTL_FLIGHT_SEARCH = 5 * 60  # 5 minutes


def flight_cache_key(origin: str, destination: str, departure_date: str) -> str:
    """Cache key for a flight search. Traveler count and result cap are not part of it."""
    return f"flights:{origin}:{destination}:{departure_date}"


class SearchCache(ABC):
    """Get/set with per-entry TTL. Expired entries read as absent."""

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        ...

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int = TTL_FLIGHT_SEARCH) -> bool:
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        ...

    async def close(self):
        pass


@dataclass
class CacheEntry:
    value: Any
    expires_at: float


class MemorySearchCache(SearchCache):
    """Process-local cache. Expiry is checked lazily on read; there is no sweeper."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    async def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry.value

    async def set(self, key: str, value: Any, ttl: int = TTL_FLIGHT_SEARCH) -> bool:
        self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + ttl)
        return True

    async def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def __len__(self) -> int:
        return len(self._entries)


class RedisSearchCache(SearchCache):
    """Redis-backed cache. Unreachable redis reads as a miss and writes are dropped."""

    def __init__(self, url: str):
        self._url = url
        self._redis: redis.Redis | None = None

    async def _get_redis(self) -> redis.Redis | None:
        if self._redis is None:
            try:
                self._redis = redis.from_url(
                    self._url,
                    encoding="utf-8",
                    decode_responses=True,
                )
                await self._redis.ping()
            except (RedisError, OSError) as e:
                logger.warning(f"Redis unavailable, cache disabled: {e}")
                self._redis = None
                return None
        return self._redis

    async def get(self, key: str) -> Any | None:
        """Get a value from cache. Returns None on miss or error."""
        r = await self._get_redis()
        if r is None:
            return None
        try:
            raw = await r.get(key)
        except RedisError as e:
            logger.warning(f"Redis get failed for {key}: {e}")
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            logger.warning(f"Discarding unreadable cache value for {key}: {e}")
            return None

    async def set(self, key: str, value: Any, ttl: int = TTL_FLIGHT_SEARCH) -> bool:
        """Set a value in cache with TTL. Returns False on error."""
        r = await self._get_redis()
        if r is None:
            return False
        try:
            await r.set(key, json.dumps(value, default=str), ex=ttl)
        except RedisError as e:
            logger.warning(f"Redis set failed for {key}: {e}")
            return False
        return True

    async def delete(self, key: str) -> bool:
        r = await self._get_redis()
        if r is None:
            return False
        try:
            await r.delete(key)
        except RedisError as e:
            logger.warning(f"Redis delete failed for {key}: {e}")
            return False
        return True

    async def close(self):
        if self._redis:
            await self._redis.aclose()
            self._redis = None


def build_search_cache(backend: str, redis_url: str | None = None) -> SearchCache:
    if backend == "redis":
        return RedisSearchCache(redis_url or "redis://localhost:6379/0")
    if backend == "memory":
        return MemorySearchCache()
    raise ValueError(f"Unknown search cache backend: {backend}")
