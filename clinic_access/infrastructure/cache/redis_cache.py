"""Redis cache for per-actor permission code listings.

Keys are "permission:<user_id>", values are JSON arrays of codes
("patient:view"). Permission decisions never read this cache; it only backs
the listing served by GET /users/{user_id}/permissions.
"""

from __future__ import annotations

import json
import logging

import redis.asyncio as redis

from clinic_access.core.config import get_settings
from clinic_access.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_PERMISSION

logger = logging.getLogger(__name__)

_UNLINK_BATCH = 500


def permission_cache_key(user_id: str) -> str:
    return f"{CACHE_PREFIX_PERMISSION}{CACHE_KEY_SEP}{user_id}"


class RedisPermissionCache:
    """Permission listing cache (implements IPermissionCache).

    Call connect() at startup and disconnect() at shutdown. Any Redis error is
    logged and reported as a miss or a failed write, so callers fall back to
    the role store.
    """

    def __init__(self, redis_client: redis.Redis | None = None, ttl: int | None = None) -> None:
        """Initialize the cache.

        Args:
            redis_client: Optional pre-built client (tests, DI).
            ttl: Seconds a listing stays cached; defaults to CACHE_TTL_PERMISSIONS.
        """
        self.settings = get_settings()
        self.redis = redis_client
        self.ttl = ttl if ttl is not None else self.settings.cache_ttl_permissions

    async def connect(self) -> None:
        """Open and ping the Redis connection; leave the cache off if that fails."""
        if not self.settings.redis_enabled:
            logger.info("Redis cache disabled (REDIS_ENABLED=false)")
            return
        if self.redis is not None:
            return
        client = redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=(
                self.settings.redis_password.get_secret_value()
                if self.settings.redis_password
                else None
            ),
            decode_responses=True,
            socket_connect_timeout=5,
        )
        try:
            await client.ping()
        except redis.RedisError as e:
            logger.warning("Redis connection failed: %s. Permission listings not cached.", e)
            await client.aclose()
            return
        self.redis = client
        logger.info(
            "Redis cache connected: %s:%s", self.settings.redis_host, self.settings.redis_port
        )

    async def disconnect(self) -> None:
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
            logger.info("Redis cache disconnected")

    def is_available(self) -> bool:
        return self.redis is not None

    async def get_codes(self, user_id: str) -> set[str] | None:
        """Return the cached codes for user_id, or None on miss or error."""
        if self.redis is None:
            return None
        key = permission_cache_key(user_id)
        try:
            raw = await self.redis.get(key)
        except redis.RedisError:
            logger.warning("Permission cache read failed for %s", key, exc_info=True)
            return None
        if raw is None:
            logger.debug("Cache MISS: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return set(json.loads(raw))

    async def set_codes(self, user_id: str, codes: set[str]) -> bool:
        """Cache codes for user_id (sorted, for stable payloads). True on success."""
        if self.redis is None:
            return False
        key = permission_cache_key(user_id)
        try:
            await self.redis.setex(key, self.ttl, json.dumps(sorted(codes)))
        except redis.RedisError:
            logger.warning("Permission cache write failed for %s", key, exc_info=True)
            return False
        return True

    async def invalidate_user(self, user_id: str) -> bool:
        """Drop one actor's listing (after their roles change)."""
        if self.redis is None:
            return False
        key = permission_cache_key(user_id)
        try:
            await self.redis.delete(key)
        except redis.RedisError:
            logger.warning("Permission cache delete failed for %s", key, exc_info=True)
            return False
        return True

    async def invalidate_all(self) -> int:
        """Drop every listing (after role grants change). Returns keys removed.

        Uses SCAN with batched UNLINK so Redis is never blocked on KEYS.
        """
        if self.redis is None:
            return 0
        pattern = permission_cache_key("*")
        removed = 0
        batch: list[str] = []
        try:
            async for key in self.redis.scan_iter(match=pattern):
                batch.append(key)
                if len(batch) >= _UNLINK_BATCH:
                    removed += await self._unlink(batch)
                    batch = []
            if batch:
                removed += await self._unlink(batch)
        except redis.RedisError:
            logger.warning("Permission cache invalidation failed for %s", pattern, exc_info=True)
            return removed
        if removed:
            logger.info("Cache INVALIDATE: %s (%s keys)", pattern, removed)
        return removed

    async def _unlink(self, keys: list[str]) -> int:
        assert self.redis is not None
        async with self.redis.pipeline(transaction=False) as pipe:
            pipe.unlink(*keys)
            results = await pipe.execute()
        return sum(int(r or 0) for r in results)
