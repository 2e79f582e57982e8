from __future__ import annotations

import typing as t
from abc import ABC, abstractmethod

from ..core.models import CacheEntry


class KeyValueStore(ABC):
    """Asynchronous key-value store the cache persists entries into.

    Implementations may raise on any failure; callers treat a failure as
    "absent" (reads) or "accepted but lost" (writes).
    """

    @abstractmethod
    async def get(self, key: str) -> t.Optional[CacheEntry]:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    async def set(self, key: str, entry: CacheEntry) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    async def delete(self, key: str) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    async def keys(self) -> t.List[t.Any]:  # pragma: no cover - interface
        """Every key in the physical store, including ones no cache owns."""
        raise NotImplementedError

    @abstractmethod
    async def is_healthy(self) -> bool:  # pragma: no cover - interface
        raise NotImplementedError

    async def close(self) -> None:
        return None


class InMemoryStore(KeyValueStore):
    """A simple in-memory adapter for dev/test and as the default backend.

    Entries are kept as dicts so callers never share a mutable entry with the store.
    """

    def __init__(self) -> None:
        self._data: t.Dict[t.Any, t.Dict[str, t.Any]] = {}

    async def get(self, key: str) -> t.Optional[CacheEntry]:
        raw = self._data.get(key)
        if raw is None:
            return None
        return CacheEntry.from_dict(raw)

    async def set(self, key: str, entry: CacheEntry) -> None:
        self._data[key] = entry.to_dict()

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def keys(self) -> t.List[t.Any]:
        return list(self._data.keys())

    async def is_healthy(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data
