from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class CacheConfig:
    namespace: str = "LocalCache"
    default_ttl_seconds: Optional[float] = 15 * 60
    cleaning_interval_seconds: float = 60
    disable_cleaning: bool = False
    immediate_clean: bool = True
    separator: str = "-"


@dataclass
class StorageConfig:
    type: str = "memory"  # memory | redis
    connection_string: Optional[str] = None
    scan_count: int = 500


@dataclass
class ResilienceConfig:
    circuit_breaker_enabled: bool = False
    failure_threshold: int = 5
    reset_timeout_seconds: float = 30.0
    retry_max_attempts: int = 1
    retry_backoff_ms: List[int] = dataclasses.field(default_factory=lambda: [100, 500, 2000])


@dataclass
class NsCacheConfig:
    cache: CacheConfig = dataclasses.field(default_factory=CacheConfig)
    storage: StorageConfig = dataclasses.field(default_factory=StorageConfig)
    resilience: ResilienceConfig = dataclasses.field(default_factory=ResilienceConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NsCacheConfig":
        def build(dc_cls, key):
            values = data.get(key) or {}
            return dc_cls(**values)

        return cls(
            cache=build(CacheConfig, "cache"),
            storage=build(StorageConfig, "storage"),
            resilience=build(ResilienceConfig, "resilience"),
        )
