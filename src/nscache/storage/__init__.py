from .base import InMemoryStore, KeyValueStore
from .factory import create_store
from .redis_adapter import RedisStore

__all__ = ["KeyValueStore", "InMemoryStore", "RedisStore", "create_store"]
