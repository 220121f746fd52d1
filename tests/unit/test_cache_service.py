"""Unit tests for RedisPermissionCache against a mocked redis client."""

from unittest.mock import AsyncMock, MagicMock

import redis.asyncio as redis

from clinic_access.infrastructure.cache.redis_cache import (
    RedisPermissionCache,
    permission_cache_key,
)


def _client() -> AsyncMock:
    client = AsyncMock()
    client.get.return_value = '["patient:view", "vitals:view"]'
    return client


def test_key_format() -> None:
    assert permission_cache_key("u1") == "permission:u1"


async def test_get_codes_hit() -> None:
    client = _client()
    cache = RedisPermissionCache(redis_client=client)
    assert cache.is_available()
    assert await cache.get_codes("u1") == {"patient:view", "vitals:view"}
    client.get.assert_awaited_once_with("permission:u1")


async def test_get_codes_miss_returns_none() -> None:
    client = _client()
    client.get.return_value = None
    assert await RedisPermissionCache(redis_client=client).get_codes("u1") is None


async def test_set_codes_stores_sorted_list_with_ttl() -> None:
    client = _client()
    cache = RedisPermissionCache(redis_client=client, ttl=30)
    assert await cache.set_codes("u1", {"vitals:view", "patient:view"}) is True
    client.setex.assert_awaited_once_with(
        "permission:u1", 30, '["patient:view", "vitals:view"]'
    )


async def test_redis_error_degrades_to_miss() -> None:
    client = _client()
    client.get.side_effect = redis.ConnectionError("down")
    client.setex.side_effect = redis.RedisError("broken")
    cache = RedisPermissionCache(redis_client=client)
    assert await cache.get_codes("u1") is None
    assert await cache.set_codes("u1", {"a:b"}) is False


async def test_invalidate_user_deletes_key() -> None:
    client = _client()
    assert await RedisPermissionCache(redis_client=client).invalidate_user("u1") is True
    client.delete.assert_awaited_once_with("permission:u1")


async def test_unconnected_cache_is_a_no_op() -> None:
    cache = RedisPermissionCache()
    assert not cache.is_available()
    assert await cache.get_codes("u1") is None
    assert await cache.set_codes("u1", {"a:b"}) is False
    assert await cache.invalidate_user("u1") is False
    assert await cache.invalidate_all() == 0


async def test_connect_is_skipped_when_disabled() -> None:
    cache = RedisPermissionCache()
    await cache.connect()
    assert cache.redis is None


async def test_invalidate_all_unlinks_scanned_keys() -> None:
    client = MagicMock()
    patterns: list[str] = []

    async def _scan_iter(match: str):
        patterns.append(match)
        for key in ("permission:u1", "permission:u2"):
            yield key

    pipe = MagicMock()
    pipe.execute = AsyncMock(return_value=[2])
    pipe_ctx = MagicMock()
    pipe_ctx.__aenter__ = AsyncMock(return_value=pipe)
    pipe_ctx.__aexit__ = AsyncMock(return_value=False)
    client.scan_iter = _scan_iter
    client.pipeline.return_value = pipe_ctx

    removed = await RedisPermissionCache(redis_client=client).invalidate_all()

    assert removed == 2
    assert patterns == ["permission:*"]
    pipe.unlink.assert_called_once_with("permission:u1", "permission:u2")
