"""TTS (Text-to-Speech) package for ttsgate.

This package provides request validation, the error taxonomy and the
synthesis gateway in front of the Gemini API.
"""

from .errors import TTSError, UnauthorizedError, UpstreamError, ValidationError
from .gateway import SynthesisGateway
from .models import SynthesisRequest

__all__ = [
    "SynthesisGateway",
    "SynthesisRequest",
    "TTSError",
    "UnauthorizedError",
    "UpstreamError",
    "ValidationError",
]
