"""Tests for the in-memory CacheService backend."""

from src.cp_common.cache import CacheService


class TestMemoryCache:
    async def test_set_get(self) -> None:
        cache = CacheService(use_redis=False)
        await cache.set("contractor:1", {"name": "Acme"})
        assert await cache.get("contractor:1") == {"name": "Acme"}
        assert await cache.exists("contractor:1")

    async def test_miss(self) -> None:
        cache = CacheService(use_redis=False)
        assert await cache.get("missing") is None
        assert not await cache.exists("missing")

    async def test_expired_entry_is_a_miss(self) -> None:
        cache = CacheService(use_redis=False)
        await cache.set("k", 1, ttl=10)
        expires_at, raw = cache._memory["k"]
        cache._memory["k"] = (expires_at - 11, raw)
        assert await cache.get("k") is None

    async def test_zero_ttl_is_not_stored(self) -> None:
        cache = CacheService(use_redis=False)
        await cache.set("k", 1)
        await cache.set("k", 2, ttl=0)
        assert await cache.get("k") is None

    async def test_default_ttl_applies_when_omitted(self) -> None:
        cache = CacheService(use_redis=False)
        await cache.set("k", 1)
        assert "k" in cache._memory

    async def test_unreadable_entry_is_a_miss(self) -> None:
        cache = CacheService(use_redis=False)
        await cache.set("k", 1, ttl=10)
        expires_at, _ = cache._memory["k"]
        cache._memory["k"] = (expires_at, "{not json")
        assert await cache.get("k") is None
        assert "k" not in cache._memory

    async def test_delete(self) -> None:
        cache = CacheService(use_redis=False)
        await cache.set("k", 1)
        await cache.delete("k")
        assert await cache.get("k") is None

    async def test_delete_pattern(self) -> None:
        cache = CacheService(use_redis=False)
        await cache.set("contractor:list:a", 1)
        await cache.set("contractor:list:b", 2)
        await cache.set("contractor:1", 3)
        assert await cache.delete_pattern("contractor:list:*") == 2
        assert await cache.get("contractor:1") == 3

    async def test_clear(self) -> None:
        cache = CacheService(use_redis=False)
        await cache.set("a", 1)
        await cache.clear()
        assert await cache.get("a") is None

    async def test_ping_and_backend(self) -> None:
        cache = CacheService(use_redis=False)
        assert await cache.ping() is True
        assert cache.backend == "memory"
