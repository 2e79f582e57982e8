from __future__ import annotations


class NsCacheError(Exception):
    """Base class for nscache errors."""


class StoreUnavailable(NsCacheError):
    """The underlying key-value store could not be reached or refused the call."""

    def __init__(self, op: str, key: str | None = None, cause: BaseException | None = None) -> None:
        self.op = op
        self.key = key
        self.cause = cause
        detail = f"{op}" if key is None else f"{op} {key!r}"
        if cause is not None:
            detail = f"{detail}: {cause!r}"
        super().__init__(detail)


class NotInNamespace(NsCacheError, KeyError):
    """A physical key does not carry this cache's namespace prefix."""

    def __init__(self, key: object, prefix: str) -> None:
        self.key = key
        self.prefix = prefix
        super().__init__(f"{key!r} is not under prefix {prefix!r}")

    def __str__(self) -> str:
        return self.args[0]
