"""Redis-backed translation cache."""

import hashlib

import redis.asyncio as redis

from voice_relay.exceptions import CacheServiceError
from voice_relay.infrastructure.interfaces import CacheService
from voice_relay.logging import setup_logging

logger = setup_logging()


class RedisCacheService(CacheService):
    """
    Stores serialized translations in Redis with a TTL.

    Cache keys embed the full source text, so they are hashed before use to
    keep Redis keys short and uniform. Logs never include the source text.
    """

    def __init__(self, client: redis.Redis, ttl_seconds: int, namespace: str = "voice-relay"):
        self._client = client
        self._ttl_seconds = ttl_seconds
        self._namespace = namespace

    def redis_key(self, key: str) -> str:
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return f"{self._namespace}:{digest}"

    async def get(self, key: str) -> str | None:
        """
        Returns the cached value, or None on a miss.

        Raises:
            CacheServiceError: If Redis is unreachable or errors.
        """
        redis_key = self.redis_key(key)
        try:
            value = await self._client.get(redis_key)
        except redis.RedisError as e:
            logger.warning("Translation cache read failed", extra={"redis_key": redis_key, "error": str(e)})
            raise CacheServiceError(redis_key, "get", cause=e) from e

        logger.debug("Translation cache lookup", extra={"redis_key": redis_key, "hit": value is not None})
        return value

    async def set(self, key: str, value: str) -> None:
        """
        Stores a value until the TTL expires.

        Raises:
            CacheServiceError: If Redis is unreachable or errors.
        """
        redis_key = self.redis_key(key)
        try:
            await self._client.set(redis_key, value, ex=self._ttl_seconds)
        except redis.RedisError as e:
            logger.warning("Translation cache write failed", extra={"redis_key": redis_key, "error": str(e)})
            raise CacheServiceError(redis_key, "set", cause=e) from e
