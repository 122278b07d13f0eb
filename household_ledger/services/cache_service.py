"""Redis cache for computed household views"""
import logging
from typing import Optional
from uuid import UUID

import redis.asyncio as redis

from household_ledger.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def household_key(household_id: UUID, view: str) -> str:
    """Cache key of one computed view (balances, positions, ...) of a household"""
    return f"household:{household_id}:{view}"


class CacheService:
    """
    Cached views of a household, stored as JSON strings.

    Every view of a household shares the ``household:{id}:`` prefix so a
    single write to the ledger can drop all of them at once. Redis errors are
    logged and reported as a miss; the ledger itself is the source of truth.
    """

    _redis_client: Optional[redis.Redis] = None

    @classmethod
    def get_redis_client(cls) -> redis.Redis:
        """Lazily create the shared client"""
        if cls._redis_client is None:
            cls._redis_client = redis.from_url(
                settings.redis_url, encoding="utf-8", decode_responses=True
            )
        return cls._redis_client

    @classmethod
    async def close_redis_client(cls) -> None:
        if cls._redis_client is not None:
            await cls._redis_client.aclose()
            cls._redis_client = None

    @classmethod
    async def read_view(cls, household_id: UUID, view: str) -> Optional[str]:
        """
        Read a cached view.

        Args:
            household_id: Household ID
            view: View name

        Returns:
            Cached JSON, or None on a miss or when Redis is unavailable
        """
        key = household_key(household_id, view)
        try:
            return await cls.get_redis_client().get(key)
        except redis.RedisError as e:
            logger.warning("Cache read failed for %s: %s", key, e)
            return None

    @classmethod
    async def write_view(
        cls, household_id: UUID, view: str, payload: str, ttl: Optional[int] = None
    ) -> bool:
        """
        Store a computed view.

        Args:
            household_id: Household ID
            view: View name
            payload: JSON to store
            ttl: Seconds to keep it, defaults to settings.balance_cache_ttl

        Returns:
            True if stored
        """
        key = household_key(household_id, view)
        try:
            await cls.get_redis_client().set(
                key, payload, ex=ttl or settings.balance_cache_ttl
            )
            return True
        except redis.RedisError as e:
            logger.warning("Cache write failed for %s: %s", key, e)
            return False

    @classmethod
    async def invalidate_household(cls, household_id: UUID) -> int:
        """
        Drop every cached view of a household.

        Args:
            household_id: Household ID

        Returns:
            Number of keys removed
        """
        pattern = household_key(household_id, "*")
        try:
            client = cls.get_redis_client()
            keys = [key async for key in client.scan_iter(match=pattern)]
            if not keys:
                return 0
            return await client.delete(*keys)
        except redis.RedisError as e:
            logger.warning("Cache invalidation failed for household %s: %s", household_id, e)
            return 0

    @classmethod
    async def health_check(cls) -> bool:
        """True if Redis answers a ping"""
        try:
            return bool(await cls.get_redis_client().ping())
        except redis.RedisError:
            return False
