from .metrics import (
    Counter,
    Histogram,
    nscache_evictions_total,
    nscache_requests_total,
    nscache_store_failures_total,
    nscache_sweep_duration_seconds,
)

__all__ = [
    "Counter",
    "Histogram",
    "nscache_requests_total",
    "nscache_evictions_total",
    "nscache_store_failures_total",
    "nscache_sweep_duration_seconds",
]
