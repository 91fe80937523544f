"""Cache management for ttsgate synthesis results."""

from .manager import DEFAULT_TTL_SECONDS, ResultCache, make_fingerprint
from .models import CacheEntry, PayloadKind

__all__ = [
    "DEFAULT_TTL_SECONDS",
    "CacheEntry",
    "PayloadKind",
    "ResultCache",
    "make_fingerprint",
]
