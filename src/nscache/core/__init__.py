from .codec import EXPIRED, decode, encode, is_expired
from .errors import NotInNamespace, NsCacheError, StoreUnavailable
from .models import CacheEntry
from .namespace import DEFAULT_SEPARATOR, KeyNamespacer

__all__ = [
    "CacheEntry",
    "KeyNamespacer",
    "DEFAULT_SEPARATOR",
    "encode",
    "decode",
    "is_expired",
    "EXPIRED",
    "NsCacheError",
    "StoreUnavailable",
    "NotInNamespace",
]
