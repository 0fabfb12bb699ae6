"""Key-value cache with TTL expiry.

Backed by Redis when REDIS_URL is configured, otherwise by a process-local
dict of (expires_at, json) pairs. Values are stored as JSON. Cache failures
are logged and treated as a miss; they never fail the caller.
"""

import fnmatch
import json
import logging
import time
from typing import Any

from config.settings import settings
from src.cp_common.redis_client import get_redis, redis_enabled

logger = logging.getLogger(__name__)


class CacheService:
    def __init__(self, use_redis: bool | None = None) -> None:
        self._use_redis = redis_enabled() if use_redis is None else use_redis
        self._memory: dict[str, tuple[float, str]] = {}

    @property
    def backend(self) -> str:
        return "redis" if self._use_redis else "memory"

    async def get(self, key: str) -> Any | None:
        try:
            if self._use_redis:
                raw = await (await get_redis()).get(key)
            else:
                raw = self._memory_get(key)
        except Exception:
            logger.warning("Cache get failed for %s", key, exc_info=True)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Discarding unreadable cache entry %s", key)
            await self.delete(key)
            return None

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        if ttl is None:
            ttl = settings.CACHE_DEFAULT_TTL_SECONDS
        if ttl <= 0:
            await self.delete(key)
            return
        raw = json.dumps(value, default=str)
        try:
            if self._use_redis:
                await (await get_redis()).set(key, raw, ex=ttl)
            else:
                self._memory[key] = (time.monotonic() + ttl, raw)
        except Exception:
            logger.warning("Cache set failed for %s", key, exc_info=True)

    async def delete(self, key: str) -> None:
        try:
            if self._use_redis:
                await (await get_redis()).delete(key)
            else:
                self._memory.pop(key, None)
        except Exception:
            logger.warning("Cache delete failed for %s", key, exc_info=True)

    async def delete_pattern(self, pattern: str) -> int:
        """Delete every key matching a glob pattern (e.g. ``contractor:list:*``)."""
        try:
            if self._use_redis:
                client = await get_redis()
                keys = [k async for k in client.scan_iter(match=pattern)]
                if keys:
                    await client.delete(*keys)
                return len(keys)
            keys = [k for k in self._memory if fnmatch.fnmatchcase(k, pattern)]
            for k in keys:
                del self._memory[k]
            return len(keys)
        except Exception:
            logger.warning("Cache pattern delete failed for %s", pattern, exc_info=True)
            return 0

    async def exists(self, key: str) -> bool:
        return await self.get(key) is not None

    async def clear(self) -> None:
        try:
            if self._use_redis:
                await (await get_redis()).flushdb()
            else:
                self._memory.clear()
        except Exception:
            logger.warning("Cache clear failed", exc_info=True)

    async def ping(self) -> bool:
        """Health check. Raises when the backend is unreachable."""
        if self._use_redis:
            return bool(await (await get_redis()).ping())
        return True

    def _memory_get(self, key: str) -> str | None:
        entry = self._memory.get(key)
        if entry is None:
            return None
        expires_at, raw = entry
        if expires_at <= time.monotonic():
            del self._memory[key]
            return None
        return raw


cache = CacheService()
