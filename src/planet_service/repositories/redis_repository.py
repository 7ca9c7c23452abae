"""Redis implementation of CacheStore.

Values are stored as JSON strings with a per-key TTL. The repository is
strictly advisory: every Redis or serialization failure is logged and
reported as a miss (``get``) or a ``False`` result (``set``/``delete``),
never raised to the caller.
"""

import json
from typing import Any

import redis.asyncio as redis
from loguru import logger
from redis.exceptions import RedisError

from planet_service.config import Settings, get_redis_client, settings

# INCR and the first EXPIRE run as one server-side step, so a counter can
# never be created without its window expiry.
INCREMENT_WINDOW_SCRIPT = """
local count = redis.call('INCR', KEYS[1])
if count == 1 then
    redis.call('EXPIRE', KEYS[1], ARGV[1])
end
return count
"""


class RedisCacheRepository:
    """Redis key-value cache.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize the Redis cache repository.

        Args:
            redis_client: Redis client instance. If None, creates default.
        """
        self._client = redis_client or get_redis_client()
        self._increment_window = self._client.register_script(INCREMENT_WINDOW_SCRIPT)

    @classmethod
    def create(cls, config: Settings | None = None) -> "RedisCacheRepository":
        """Factory method to create RedisCacheRepository from settings.

        Args:
            config: Settings to read the Redis address from. If None, uses settings.

        Returns:
            Configured RedisCacheRepository
        """
        return cls(redis_client=get_redis_client(config or settings))

    async def get(self, key: str) -> Any | None:
        try:
            raw = await self._client.get(key)
        except RedisError as e:
            logger.warning("Cache read failed for {}: {}", key, e)
            return None
        except UnicodeDecodeError as e:
            # Reply bytes are decoded by the client before they reach us.
            logger.warning("Discarding non-UTF-8 cache entry {}: {}", key, e)
            return None

        if raw is None:
            return None

        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Discarding undecodable cache entry {}: {}", key, e)
            return None

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as e:
            logger.warning("Cannot serialize value for {}: {}", key, e)
            return False

        try:
            await self._client.set(key, payload, ex=ttl)
        except RedisError as e:
            logger.warning("Cache write failed for {}: {}", key, e)
            return False
        return True

    async def delete(self, *keys: str) -> bool:
        if not keys:
            return True
        try:
            await self._client.delete(*keys)
        except RedisError as e:
            logger.error("Failed to invalidate cache keys {}: {}", ", ".join(keys), e)
            return False
        logger.info("Cache invalidated for {}", ", ".join(keys))
        return True

    async def increment_window(self, key: str, window_seconds: int) -> int | None:
        try:
            count = await self._increment_window(keys=[key], args=[window_seconds])
        except RedisError as e:
            logger.error("Rate limit counter unavailable for {}: {}", key, e)
            return None
        return int(count)

    async def ping(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except RedisError as e:
            logger.warning("Redis ping failed: {}", e)
            return False

    async def close(self) -> None:
        await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
