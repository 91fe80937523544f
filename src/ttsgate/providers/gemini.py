"""Gemini text-to-speech provider implementation."""

import asyncio
import base64
import binascii
import logging
import os
from typing import Any

from google import genai
from google.genai import types

from ..tts.errors import UpstreamError
from .base import TTSProvider

logger = logging.getLogger(__name__)

NO_AUDIO_MESSAGE = "No audio produced by model"


def extract_audio_data(response: Any) -> bytes | str | None:
    """Return the inline audio payload of the first candidate's first part.

    Returns None when any link of the path is absent.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    if not parts:
        return None
    inline_data = getattr(parts[0], "inline_data", None)
    if inline_data is None:
        return None
    return getattr(inline_data, "data", None) or None


def decode_audio_data(data: bytes | str) -> bytes:
    """Decode the transport encoding of an audio payload into raw PCM.

    The REST wire format is base64 text. The Python SDK usually hands back
    bytes already decoded, which pass through untouched.

    Raises:
        UpstreamError: If a text payload is not valid base64
    """
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise UpstreamError(f"Invalid audio payload encoding: {e}", None, e) from e


class GeminiProvider(TTSProvider):
    """Gemini TTS provider backed by the google-genai SDK."""

    def __init__(self, api_key: str | None = None, client: Any | None = None) -> None:
        """Initialize Gemini provider.

        Args:
            api_key: Gemini API key. If not provided, reads from
                    GEMINI_API_KEY or GOOGLE_API_KEY environment variables.
            client: Pre-built genai client (tests inject a stub here)

        Raises:
            UpstreamError: If no API key is available or the client fails to build.
        """
        if client is not None:
            self._client = client
            return

        api_key = api_key or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        if not api_key:
            raise UpstreamError(
                "Gemini API key not found. Set GEMINI_API_KEY or GOOGLE_API_KEY "
                "environment variable or provide api_key parameter."
            )

        try:
            self._client = genai.Client(api_key=api_key)
        except Exception as e:
            raise UpstreamError(f"Failed to initialize Gemini client: {e}", None, e) from e

    @staticmethod
    def build_config(voice: str) -> types.GenerateContentConfig:
        """Request audio-only output spoken with a prebuilt voice."""
        return types.GenerateContentConfig(
            response_modalities=["AUDIO"],
            speech_config=types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=voice)
                )
            ),
        )

    async def synthesize(self, text: str, voice: str, model: str) -> bytes:
        """Convert text to raw PCM audio bytes.

        Args:
            text: Text to convert to speech
            voice: Prebuilt voice name (e.g., "Kore")
            model: Gemini TTS model identifier

        Returns:
            Raw 16-bit mono 24 kHz PCM

        Raises:
            UpstreamError: If the API call fails or returns no audio
        """
        config = self.build_config(voice)

        # Run synchronous genai client in thread to avoid blocking event loop
        def _sync_generate() -> Any:
            return self._client.models.generate_content(
                model=model,
                contents=text,
                config=config,
            )

        try:
            response = await asyncio.to_thread(_sync_generate)
        except Exception as e:
            logger.error(f"Gemini generate_content failed for model {model}: {e}")
            status_code = getattr(e, "code", None)
            raise UpstreamError(
                f"API call failed: {e}",
                status_code if isinstance(status_code, int) else None,
                e,
            ) from e

        data = extract_audio_data(response)
        if data is None:
            raise UpstreamError(NO_AUDIO_MESSAGE)

        return decode_audio_data(data)
