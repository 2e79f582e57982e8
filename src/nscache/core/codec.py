from __future__ import annotations

import time
import typing as t

from ..utils.timeutil import add_seconds
from .models import CacheEntry


class _Expired:
    """Sentinel returned by :func:`decode` for an entry past its expiry."""

    _instance: t.Optional["_Expired"] = None

    def __new__(cls) -> "_Expired":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EXPIRED"

    def __bool__(self) -> bool:
        return False


EXPIRED = _Expired()


def encode(value: t.Any, ttl_seconds: t.Optional[float], now: t.Optional[float] = None) -> CacheEntry:
    """Wrap ``value`` with an expiry ``ttl_seconds`` from ``now``.

    A zero or ``None`` TTL produces an entry that never expires.
    """
    if not ttl_seconds:
        return CacheEntry(value=value)
    now = time.time() if now is None else now
    return CacheEntry(value=value, expires_at=add_seconds(now, ttl_seconds))


def is_expired(entry: CacheEntry, now: t.Optional[float] = None) -> bool:
    if entry.expires_at is None:
        return False
    now = time.time() if now is None else now
    # an entry expiring exactly at ``now`` is still live
    return entry.expires_at < now


def decode(entry: CacheEntry, now: t.Optional[float] = None) -> t.Any:
    if is_expired(entry, now):
        return EXPIRED
    return entry.value
