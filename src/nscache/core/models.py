from __future__ import annotations

import typing as t
from dataclasses import dataclass


@dataclass
class CacheEntry:
    """Persisted unit: the caller's value plus an optional absolute expiry.

    ``expires_at`` is a POSIX timestamp in seconds. ``None`` never expires.
    """

    value: t.Any
    expires_at: t.Optional[float] = None

    def to_dict(self) -> t.Dict[str, t.Any]:
        data: t.Dict[str, t.Any] = {"value": self.value}
        if self.expires_at is not None:
            data["expires_at"] = self.expires_at
        return data

    @classmethod
    def from_dict(cls, data: t.Any) -> "CacheEntry":
        if not isinstance(data, dict) or "value" not in data:
            raise ValueError(f"not a cache entry: {data!r}")
        expires_at = data.get("expires_at")
        return cls(value=data["value"], expires_at=float(expires_at) if expires_at is not None else None)
