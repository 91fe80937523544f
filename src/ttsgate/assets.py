"""Persisted audio assets served at a public URL.

Files are written once under a random identifier and never deleted here;
a retention policy can wrap or replace ``AssetStore``.
"""

import asyncio
import logging
import re
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

ASSET_URL_PREFIX = "/audio"
ASSET_SUFFIX = ".wav"

_ASSET_ID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")


@dataclass(frozen=True)
class AudioAsset:
    """A WAV file persisted for URL retrieval.

    Attributes:
        id: Random identifier, also the file stem
        path: Location on disk
    """

    id: uuid.UUID
    path: Path

    @property
    def filename(self) -> str:
        return f"{self.id}{ASSET_SUFFIX}"

    @property
    def url_path(self) -> str:
        """Path component of the public URL, e.g. ``/audio/<id>.wav``."""
        return f"{ASSET_URL_PREFIX}/{self.filename}"


class AssetStore(ABC):
    """Storage for audio assets that are retrieved by URL."""

    @abstractmethod
    async def put(self, data: bytes) -> AudioAsset:
        """Persist ``data`` under a fresh identifier."""
        pass

    @abstractmethod
    def resolve(self, asset_id: str) -> Path | None:
        """Return the file for ``asset_id`` if it exists."""
        pass


class LocalAssetStore(AssetStore):
    """Asset store backed by a single local directory of ``<uuid>.wav`` files."""

    def __init__(self, directory: Path) -> None:
        """Initialize store and create the directory if needed.

        Args:
            directory: Directory served statically under ``/audio``
        """
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    async def put(self, data: bytes) -> AudioAsset:
        asset_id = uuid.uuid4()
        path = self.directory / f"{asset_id}{ASSET_SUFFIX}"

        # Blocking file write off the event loop
        await asyncio.to_thread(path.write_bytes, data)
        logger.debug(f"Saved audio asset {path} ({len(data)} bytes)")

        return AudioAsset(id=asset_id, path=path)

    def resolve(self, asset_id: str) -> Path | None:
        stem = asset_id.removesuffix(ASSET_SUFFIX)
        if not _ASSET_ID_PATTERN.match(stem):
            return None
        path = self.directory / f"{stem}{ASSET_SUFFIX}"
        return path if path.is_file() else None
