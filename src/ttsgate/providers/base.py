"""Abstract base class for text-to-speech backends.

This module defines the interface the synthesis gateway calls, so the
Gemini backend can be swapped for a stub in tests or another service later.
"""

from abc import ABC, abstractmethod


class TTSProvider(ABC):
    """Abstract base class for text-to-speech backends.

    Providers return raw PCM only (16-bit signed little-endian, mono,
    24 kHz). Container wrapping and caching are the gateway's job.
    """

    @abstractmethod
    async def synthesize(self, text: str, voice: str, model: str) -> bytes:
        """Convert text to raw PCM audio.

        Args:
            text: The text to convert to speech
            voice: Prebuilt voice name to use
            model: Backend model identifier

        Returns:
            Raw PCM bytes

        Raises:
            UpstreamError: If the backend fails or returns no audio
        """
        pass
