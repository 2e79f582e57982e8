from __future__ import annotations

from ..utils.config import StorageConfig
from .base import InMemoryStore, KeyValueStore
from .redis_adapter import RedisStore


def create_store(config: StorageConfig) -> KeyValueStore:
    """Build the store adapter named by ``config.type``."""
    kind = (config.type or "memory").lower()
    if kind == "memory":
        return InMemoryStore()
    if kind == "redis":
        return RedisStore(config.connection_string or "redis://localhost:6379/0", scan_count=config.scan_count)
    raise ValueError(f"unsupported storage type: {config.type!r}")
