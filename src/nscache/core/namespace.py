from __future__ import annotations

import typing as t

from .errors import NotInNamespace

DEFAULT_SEPARATOR = "-"


class KeyNamespacer:
    """Maps caller-facing keys to physical store keys and back.

    A physical key is ``namespace + separator + logical_key``. Matching always
    uses the full prefix and a namespace may not contain the separator, so no
    namespace can own another's keys: ``"a"`` never sees ``"ab-x"``, and
    ``"a-b"`` is rejected.
    """

    def __init__(self, namespace: str, separator: str = DEFAULT_SEPARATOR) -> None:
        if not namespace:
            raise ValueError("namespace must be a non-empty string")
        if not separator:
            raise ValueError("separator must be a non-empty string")
        if separator in namespace:
            raise ValueError(f"namespace {namespace!r} must not contain the separator {separator!r}")
        self._namespace = namespace
        self._separator = separator
        self._prefix = f"{namespace}{separator}"

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def prefix(self) -> str:
        return self._prefix

    def to_physical(self, logical_key: str) -> str:
        return f"{self._prefix}{logical_key}"

    def owns(self, physical_key: t.Any) -> bool:
        return isinstance(physical_key, str) and physical_key.startswith(self._prefix)

    def to_logical(self, physical_key: t.Any) -> str:
        if not self.owns(physical_key):
            raise NotInNamespace(physical_key, self._prefix)
        return physical_key[len(self._prefix) :]

    def logical_keys(self, physical_keys: t.Iterable[t.Any]) -> t.List[str]:
        keys: t.List[str] = []
        for physical_key in physical_keys:
            try:
                keys.append(self.to_logical(physical_key))
            except NotInNamespace:
                continue
        return keys

    def __repr__(self) -> str:
        return f"KeyNamespacer(namespace={self._namespace!r}, separator={self._separator!r})"
