"""Shared fixtures and mocks for unit tests."""

from __future__ import annotations

import time
import typing as t
from unittest.mock import AsyncMock

import pytest

from nscache.core.cache import TtlCache
from nscache.core.models import CacheEntry
from nscache.monitoring import metrics
from nscache.storage.base import InMemoryStore


@pytest.fixture(autouse=True)
def reset_metrics():
    """Metrics are module-level; start every test from zero."""
    for metric in (
        metrics.nscache_requests_total,
        metrics.nscache_evictions_total,
        metrics.nscache_store_failures_total,
        metrics.nscache_sweep_duration_seconds,
    ):
        metric.reset()
    yield


@pytest.fixture
def memory_store():
    """Real in-memory store, inspectable directly."""
    return InMemoryStore()


@pytest.fixture
def mock_store():
    """Mock key-value store."""
    store = AsyncMock()
    store.get = AsyncMock(return_value=None)
    store.set = AsyncMock(return_value=None)
    store.delete = AsyncMock(return_value=None)
    store.keys = AsyncMock(return_value=[])
    store.is_healthy = AsyncMock(return_value=True)
    return store


@pytest.fixture
def failing_store():
    """Store whose every call raises, like storage disabled in a private session."""
    error = PermissionError("storage disabled")
    store = AsyncMock()
    store.get = AsyncMock(side_effect=error)
    store.set = AsyncMock(side_effect=error)
    store.delete = AsyncMock(side_effect=error)
    store.keys = AsyncMock(side_effect=error)
    store.is_healthy = AsyncMock(return_value=False)
    return store


@pytest.fixture
def mock_redis_client():
    """Mock Redis client."""
    client = AsyncMock()
    client.ping = AsyncMock(return_value=True)
    client.get = AsyncMock(return_value=None)
    client.set = AsyncMock(return_value=True)
    client.delete = AsyncMock(return_value=1)
    client.scan_iter = lambda **kwargs: AsyncIterator([])
    return client


class AsyncIterator:
    """Helper for creating async iterators in tests."""

    def __init__(self, items):
        self.items = list(items)

    def __aiter__(self):
        return self

    async def __anext__(self):
        if not self.items:
            raise StopAsyncIteration
        return self.items.pop(0)


@pytest.fixture
def quiet_cache():
    """Factory for caches with no background cleaning unless a test asks for it."""

    def build(store=None, **kwargs: t.Any) -> TtlCache:
        kwargs.setdefault("disable_cleaning", True)
        kwargs.setdefault("immediate_clean", False)
        return TtlCache(store, **kwargs)

    return build


@pytest.fixture
def expired_entry():
    """Factory for entries whose expiry is already in the past."""

    def build(value: t.Any = "stale", ago: float = 10.0) -> CacheEntry:
        return CacheEntry(value=value, expires_at=time.time() - ago)

    return build
