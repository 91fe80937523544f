"""Unit tests for cache models."""

import dataclasses

import pytest

from ttsgate.cache.models import CacheEntry, PayloadKind


class TestCacheEntry:
    def test_cache_entry_creation(self) -> None:
        entry = CacheEntry(payload=b"RIFF", created_at=12.5)

        assert entry.payload == b"RIFF"
        assert entry.created_at == 12.5

    def test_cache_entry_is_immutable(self) -> None:
        entry = CacheEntry(payload=b"RIFF", created_at=0.0)

        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.payload = b"other"  # type: ignore[misc]


class TestPayloadKind:
    def test_values(self) -> None:
        assert PayloadKind.WAV.value == "wav"
        assert PayloadKind("pcm") is PayloadKind.PCM
