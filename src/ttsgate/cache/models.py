"""Data models for cache storage."""

from dataclasses import dataclass
from enum import Enum


class PayloadKind(str, Enum):
    """Shape of a cached audio payload."""

    WAV = "wav"
    PCM = "pcm"


@dataclass(frozen=True)
class CacheEntry:
    """Cache entry holding a synthesized audio payload.

    Attributes:
        payload: WAV file bytes or raw PCM bytes, depending on the key kind
        created_at: Clock reading when this entry was stored
    """

    payload: bytes
    created_at: float
