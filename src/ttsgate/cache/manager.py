"""In-memory result cache for synthesized audio.

Maps a request fingerprint to previously generated audio bytes for a fixed
time-to-live. Expiry is checked lazily on read; stale entries stay in memory
until overwritten or purged.
"""

import logging
import time
from collections.abc import Callable

from .models import CacheEntry, PayloadKind

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 10 * 60

FINGERPRINT_SEPARATOR = "::"


def make_fingerprint(kind: PayloadKind, model: str, voice: str, text: str) -> str:
    """Build the cache key for a synthesis request.

    The payload kind prefixes the key so WAV and raw PCM results for the same
    request never collide.

    Args:
        kind: Payload shape stored under this key
        model: Backend model identifier
        voice: Voice name
        text: Request text, already trimmed

    Returns:
        Key of the form ``"wav::model::voice::text"``
    """
    return FINGERPRINT_SEPARATOR.join((PayloadKind(kind).value, model, voice, text))


class ResultCache:
    """Time-bounded key/value store for synthesized audio.

    Example:
        cache = ResultCache()
        key = make_fingerprint(PayloadKind.WAV, "m1", "Kore", "Hello")

        if (audio := cache.get(key)) is None:
            audio = await produce_audio()
            cache.set(key, audio)
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize an empty cache.

        Args:
            ttl: Seconds an entry stays valid after it is stored
            clock: Monotonic time source, injectable for tests

        Raises:
            ValueError: If ttl is not positive
        """
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")

        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> bytes | None:
        """Return the cached payload if present and not expired."""
        entry = self._entries.get(key)
        if entry is None:
            logger.debug(f"Cache miss: {key[:80]}")
            return None

        age = self._clock() - entry.created_at
        if age >= self.ttl:
            logger.debug(f"Cache expired after {age:.1f}s: {key[:80]}")
            return None

        logger.debug(f"Cache hit ({len(entry.payload)} bytes): {key[:80]}")
        return entry.payload

    def set(self, key: str, payload: bytes) -> None:
        """Store ``payload`` under ``key``, replacing any previous entry."""
        self._entries[key] = CacheEntry(payload=bytes(payload), created_at=self._clock())

    def purge_expired(self) -> int:
        """Drop every expired entry.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        stale = [
            key
            for key, entry in self._entries.items()
            if now - entry.created_at >= self.ttl
        ]
        for key in stale:
            del self._entries[key]

        if stale:
            logger.info(f"Purged {len(stale)} expired cache entries")
        return len(stale)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
