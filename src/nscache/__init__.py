"""nscache

A namespaced time-to-live cache layered over an asynchronous key-value store.

Entries carry their own absolute expiry. Stale entries are removed when read
and by a periodic sweep over the cache's namespace, so several caches can share
one physical store without touching each other's keys.
"""

from .core.cache import TtlCache
from .core.codec import EXPIRED
from .core.errors import NotInNamespace, NsCacheError, StoreUnavailable
from .core.models import CacheEntry
from .core.namespace import KeyNamespacer
from .storage import InMemoryStore, KeyValueStore, RedisStore, create_store
from .utils.config import CacheConfig, NsCacheConfig, ResilienceConfig, StorageConfig

__all__ = [
    "TtlCache",
    "CacheEntry",
    "KeyNamespacer",
    "EXPIRED",
    "NsCacheError",
    "StoreUnavailable",
    "NotInNamespace",
    "KeyValueStore",
    "InMemoryStore",
    "RedisStore",
    "create_store",
    "CacheConfig",
    "StorageConfig",
    "ResilienceConfig",
    "NsCacheConfig",
]

__version__ = "0.1.0"
