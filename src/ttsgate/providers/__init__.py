"""Provider abstraction for text-to-speech backends."""

from .base import TTSProvider
from .gemini import GeminiProvider

__all__ = ["GeminiProvider", "TTSProvider"]
