from __future__ import annotations

import typing as t
from datetime import datetime, timedelta


def add_seconds(when: t.Union[float, datetime], seconds: float) -> t.Union[float, datetime]:
    """Add a (possibly fractional) number of seconds with millisecond accuracy.

    ``when`` is either a POSIX timestamp or a ``datetime``; the result has the
    same type.
    """
    millis = round(seconds * 1000)
    if isinstance(when, datetime):
        return when + timedelta(milliseconds=millis)
    return round(when * 1000 + millis) / 1000.0
