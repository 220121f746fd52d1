"""Cache: Redis-backed permission code listing per actor."""

from clinic_access.infrastructure.cache.redis_cache import RedisPermissionCache

__all__ = ["RedisPermissionCache"]
