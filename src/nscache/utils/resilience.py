from __future__ import annotations

import asyncio
import time
import typing as t
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, List, Optional, TypeVar

from ..core.errors import StoreUnavailable

T = TypeVar("T")


@dataclass
class StoreResult(t.Generic[T]):
    """Outcome of one store call: either a value or the failure that replaced it."""

    ok: bool
    value: Optional[T] = None
    error: Optional[StoreUnavailable] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "StoreResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: StoreUnavailable) -> "StoreResult[T]":
        return cls(ok=False, error=error)

    def value_or(self, default: T) -> T:
        if self.ok and self.value is not None:
            return self.value
        return default


@dataclass
class CircuitBreakerConfig:
    failure_threshold: int = 5
    reset_timeout_seconds: float = 30.0


class CircuitState:
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreaker:
    def __init__(self, config: Optional[CircuitBreakerConfig] = None) -> None:
        self._config = config or CircuitBreakerConfig()
        self._state = CircuitState.CLOSED
        self._failures = 0
        self._opened_at = 0.0

    @property
    def state(self) -> str:
        return self._state

    def _can_attempt(self) -> bool:
        if self._state == CircuitState.OPEN:
            if (time.time() - self._opened_at) >= self._config.reset_timeout_seconds:
                self._state = CircuitState.HALF_OPEN
                return True
            return False
        return True

    def _on_success(self) -> None:
        self._state = CircuitState.CLOSED
        self._failures = 0

    def _on_failure(self) -> None:
        self._failures += 1
        if self._state == CircuitState.HALF_OPEN or self._failures >= self._config.failure_threshold:
            self._state = CircuitState.OPEN
            self._opened_at = time.time()

    async def run(self, fn: Callable[[], Awaitable[T]], op: str = "call") -> T:
        if not self._can_attempt():
            raise StoreUnavailable(op, cause=RuntimeError("circuit_open"))
        try:
            result = await fn()
        except Exception:
            self._on_failure()
            raise
        else:
            self._on_success()
            return result


async def with_retries(
    coro_factory: Callable[[], Awaitable[T]],
    attempts: int = 3,
    backoff_ms: Optional[Iterable[int]] = None,
) -> T:
    backoff_seq: List[int] = list(backoff_ms or [100, 500, 2000])
    attempts = max(attempts, 1)
    last_exc: Exception | None = None
    for attempt in range(attempts):
        try:
            return await coro_factory()
        except Exception as exc:  # noqa: BLE001 - broad for retry wrapper
            last_exc = exc
            if attempt == attempts - 1:
                break
            delay_ms = backoff_seq[min(attempt, len(backoff_seq) - 1)]
            await asyncio.sleep(delay_ms / 1000.0)
    assert last_exc is not None
    raise last_exc
