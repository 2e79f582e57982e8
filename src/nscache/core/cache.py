from __future__ import annotations

import asyncio
import contextlib
import logging
import time
import typing as t

from nscache.monitoring.metrics import (
    nscache_evictions_total,
    nscache_requests_total,
    nscache_store_failures_total,
    nscache_sweep_duration_seconds,
)
from nscache.storage.base import InMemoryStore, KeyValueStore
from nscache.storage.factory import create_store
from nscache.utils.config import CacheConfig, NsCacheConfig, ResilienceConfig
from nscache.utils.resilience import CircuitBreaker, CircuitBreakerConfig, StoreResult, with_retries

from .codec import EXPIRED, decode, encode
from .errors import StoreUnavailable
from .namespace import DEFAULT_SEPARATOR, KeyNamespacer

_logger = logging.getLogger(__name__)

_MISSING = object()

T = t.TypeVar("T")


class TtlCache:
    """Namespaced time-to-live cache over an asynchronous key-value store.

    The cache holds no entries itself: every call round-trips to ``store``.
    Store failures never reach the caller. Reads degrade to a miss and
    writes/deletes to a no-op, so the cache keeps working when persistence
    is unavailable.

    Expired entries are removed lazily when read, and by a sweep over the
    whole namespace that runs once at start-up (``immediate_clean``) and then
    every ``cleaning_interval_seconds`` unless ``disable_cleaning`` is set.
    Scheduling needs a running event loop; when the cache is built outside
    one, call :meth:`start` (or use ``async with``) from inside the loop.

    Physical keys are ``namespace + separator + key``. ``namespace`` must not
    contain ``separator`` (``ValueError`` otherwise), or one namespace would
    own another's keys. For a name such as ``"my-app"`` pass a different
    separator, e.g. ``separator=":"``.

    No circuit breaker is used unless ``circuit_breaker`` is given; every
    call then goes to the store.
    """

    def __init__(
        self,
        store: t.Optional[KeyValueStore] = None,
        *,
        namespace: str = "LocalCache",
        default_ttl_seconds: t.Optional[float] = 15 * 60,
        cleaning_interval_seconds: float = 60,
        disable_cleaning: bool = False,
        immediate_clean: bool = True,
        separator: str = DEFAULT_SEPARATOR,
        circuit_breaker: t.Optional[CircuitBreaker] = None,
        retry_attempts: int = 1,
        retry_backoff_ms: t.Optional[t.List[int]] = None,
    ) -> None:
        if not disable_cleaning and cleaning_interval_seconds <= 0:
            raise ValueError("cleaning_interval_seconds must be positive")
        self._store = store if store is not None else InMemoryStore()
        self._namespacer = KeyNamespacer(namespace, separator)
        self._default_ttl = default_ttl_seconds
        self._cleaning_interval = cleaning_interval_seconds
        self._disable_cleaning = disable_cleaning
        self._immediate_clean = immediate_clean
        self._breaker = circuit_breaker
        self._retry_attempts = retry_attempts
        self._retry_backoff_ms = retry_backoff_ms or [100, 500, 2000]

        self._started = False
        self._cleaner: t.Optional[asyncio.Task] = None
        self._pending: t.Set[asyncio.Task] = set()

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            _logger.debug("TtlCache(%s): no running loop, cleaning deferred until start()", namespace)
        else:
            self.start()

    @classmethod
    def from_config(
        cls,
        config: t.Union[NsCacheConfig, CacheConfig],
        store: t.Optional[KeyValueStore] = None,
    ) -> "TtlCache":
        """Build a cache from configuration, creating the store when none is given."""
        resilience = ResilienceConfig()
        if isinstance(config, NsCacheConfig):
            resilience = config.resilience
            if store is None:
                store = create_store(config.storage)
            config = config.cache
        breaker = None
        if resilience.circuit_breaker_enabled:
            breaker = CircuitBreaker(
                CircuitBreakerConfig(
                    failure_threshold=resilience.failure_threshold,
                    reset_timeout_seconds=resilience.reset_timeout_seconds,
                )
            )
        return cls(
            store,
            namespace=config.namespace,
            default_ttl_seconds=config.default_ttl_seconds,
            cleaning_interval_seconds=config.cleaning_interval_seconds,
            disable_cleaning=config.disable_cleaning,
            immediate_clean=config.immediate_clean,
            separator=config.separator,
            circuit_breaker=breaker,
            retry_attempts=resilience.retry_max_attempts,
            retry_backoff_ms=resilience.retry_backoff_ms,
        )

    @property
    def namespace(self) -> str:
        return self._namespacer.namespace

    @property
    def default_ttl_seconds(self) -> t.Optional[float]:
        return self._default_ttl

    @property
    def store(self) -> KeyValueStore:
        return self._store

    @property
    def namespacer(self) -> KeyNamespacer:
        return self._namespacer

    @property
    def running(self) -> bool:
        return self._cleaner is not None and not self._cleaner.done()

    # -- public API ---------------------------------------------------------

    async def set(self, key: str, value: t.Any, ttl_seconds: t.Optional[float] = None) -> None:
        """Store ``value`` under ``key`` for ``ttl_seconds`` (instance default when ``None``).

        A TTL of ``0`` stores an entry that never expires.
        """
        ttl = self._default_ttl if ttl_seconds is None else ttl_seconds
        entry = encode(value, ttl)
        physical_key = self._namespacer.to_physical(key)
        await self._call("set", physical_key, lambda: self._store.set(physical_key, entry))

    async def get(self, key: str, default: t.Optional[T] = None) -> t.Union[t.Any, T, None]:
        """Return the live value for ``key``, or ``default`` when absent, expired or unreadable."""
        value = await self._read(key, reason="lazy")
        if value is _MISSING:
            nscache_requests_total.inc(namespace=self.namespace, result="miss")
            return default
        if value is EXPIRED:
            nscache_requests_total.inc(namespace=self.namespace, result="expired")
            return default
        nscache_requests_total.inc(namespace=self.namespace, result="hit")
        return value

    async def delete(self, key: str) -> None:
        await self._delete_physical(self._namespacer.to_physical(key))

    async def clean_expired(self) -> None:
        """Remove every expired entry in this namespace.

        Keys belonging to other namespaces (or that are not strings) are left
        alone. Reads run concurrently; all deletions are awaited before this
        returns.
        """
        started = time.perf_counter()
        listed = await self._call("keys", None, self._store.keys)
        keys = self._namespacer.logical_keys(listed.value_or([]))
        results = await asyncio.gather(*(self._read(key, reason="sweep") for key in keys))
        evicted = sum(1 for result in results if result is EXPIRED)
        nscache_sweep_duration_seconds.observe(time.perf_counter() - started, namespace=self.namespace)
        _logger.debug("swept namespace=%s keys=%d evicted=%d", self.namespace, len(keys), evicted)

    # -- scheduling ---------------------------------------------------------

    def start(self) -> None:
        """Kick off the start-up sweep and the periodic sweep. Must run inside an event loop."""
        if self._started:
            return
        self._started = True
        if self._immediate_clean:
            task = asyncio.create_task(self.clean_expired())
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
        if not self._disable_cleaning:
            self._cleaner = asyncio.create_task(self._clean_periodically())
            _logger.debug(
                "TtlCache(%s): periodic cleaning every %ss", self.namespace, self._cleaning_interval
            )

    async def close(self) -> None:
        """Stop periodic cleaning and wait for an in-flight start-up sweep."""
        cleaner, self._cleaner = self._cleaner, None
        if cleaner is not None:
            cleaner.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await cleaner
            _logger.debug("TtlCache(%s): periodic cleaning stopped", self.namespace)
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
        self._started = False

    async def __aenter__(self) -> "TtlCache":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _clean_periodically(self) -> None:
        while True:
            await asyncio.sleep(self._cleaning_interval)
            try:
                await self.clean_expired()
            except Exception:
                _logger.exception("TtlCache(%s): periodic sweep failed", self.namespace)

    # -- internals ----------------------------------------------------------

    async def _read(self, key: str, reason: str) -> t.Any:
        """Read ``key``, deleting it when expired.

        Returns the value, ``EXPIRED`` (after the delete completed) or ``_MISSING``.
        Shared by :meth:`get` and :meth:`clean_expired`.
        """
        physical_key = self._namespacer.to_physical(key)
        result = await self._call("get", physical_key, lambda: self._store.get(physical_key))
        entry = result.value if result.ok else None
        if entry is None:
            return _MISSING
        value = decode(entry)
        if value is EXPIRED:
            await self._delete_physical(physical_key)
            nscache_evictions_total.inc(namespace=self.namespace, reason=reason)
            _logger.debug("evicted expired %s (%s)", physical_key, reason)
        return value

    async def _delete_physical(self, physical_key: str) -> None:
        await self._call("delete", physical_key, lambda: self._store.delete(physical_key))

    async def _call(
        self,
        op: str,
        physical_key: t.Optional[str],
        fn: t.Callable[[], t.Awaitable[T]],
    ) -> StoreResult[T]:
        def attempt() -> t.Awaitable[T]:
            return with_retries(fn, self._retry_attempts, self._retry_backoff_ms)

        try:
            if self._breaker is None:
                value = await attempt()
            else:
                value = await self._breaker.run(attempt, op=op)
        except Exception as exc:
            error = exc if isinstance(exc, StoreUnavailable) else StoreUnavailable(op, physical_key, exc)
            nscache_store_failures_total.inc(namespace=self.namespace, op=op)
            _logger.warning("TtlCache(%s): store %s failed: %s", self.namespace, op, error)
            return StoreResult.failure(error)
        return StoreResult.success(value)

    def __repr__(self) -> str:
        return f"TtlCache(namespace={self.namespace!r}, default_ttl_seconds={self._default_ttl!r})"
