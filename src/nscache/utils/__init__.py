"""Resilience, configuration and time helpers."""

from .config import CacheConfig, NsCacheConfig, ResilienceConfig, StorageConfig
from .resilience import CircuitBreaker, CircuitBreakerConfig, CircuitState, StoreResult, with_retries
from .timeutil import add_seconds

__all__ = [
    "CacheConfig",
    "NsCacheConfig",
    "ResilienceConfig",
    "StorageConfig",
    "CircuitBreaker",
    "CircuitBreakerConfig",
    "CircuitState",
    "StoreResult",
    "with_retries",
    "add_seconds",
]
