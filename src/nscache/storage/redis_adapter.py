from __future__ import annotations

import json
import logging
import typing as t

from ..core.models import CacheEntry
from .base import KeyValueStore

_logger = logging.getLogger(__name__)

_redis_lib: t.Any | None = None
try:
    import redis.asyncio as _redis_lib  # type: ignore
except Exception:  # pragma: no cover - optional dependency
    _redis_lib = None


class RedisStore(KeyValueStore):
    """Redis-backed key-value store.

    - Each entry is a JSON string ``{"value": ..., "expires_at": ...}`` at its physical key
    - Values must be JSON serializable
    - Expiry lives in the entry; Redis key TTLs are not used
    - ``keys()`` walks the whole database with ``SCAN``
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        *,
        client: t.Any | None = None,
        scan_count: int = 500,
    ) -> None:
        self._url = url
        self._scan_count = scan_count
        if client is not None:
            self._redis = client
            return
        if _redis_lib is None:
            raise ImportError("Redis asyncio client is required. Install with: pip install redis")
        self._redis = _redis_lib.from_url(url, decode_responses=True)

    async def get(self, key: str) -> t.Optional[CacheEntry]:
        raw = await self._redis.get(key)
        if raw is None:
            return None
        if isinstance(raw, (bytes, bytearray)):
            raw = raw.decode()
        try:
            return CacheEntry.from_dict(json.loads(raw))
        except ValueError:
            # json.JSONDecodeError is a ValueError too
            _logger.warning("RedisStore: ignoring undecodable payload at %s", key)
            return None

    async def set(self, key: str, entry: CacheEntry) -> None:
        await self._redis.set(key, json.dumps(entry.to_dict()))

    async def delete(self, key: str) -> None:
        await self._redis.delete(key)

    async def keys(self) -> t.List[t.Any]:
        found: t.List[t.Any] = []
        async for key in self._redis.scan_iter(count=self._scan_count):
            found.append(key.decode() if isinstance(key, (bytes, bytearray)) else key)
        return found

    async def is_healthy(self) -> bool:
        try:
            pong = await self._redis.ping()
            return bool(pong)
        except Exception:
            return False

    async def close(self) -> None:  # pragma: no cover - convenience
        try:
            await self._redis.close()
        except Exception:
            pass
