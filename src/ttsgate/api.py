"""High-level API for ttsgate library usage."""

from pathlib import Path

from .config import DEFAULT_MODEL, DEFAULT_VOICE
from .providers.gemini import GeminiProvider
from .tts.gateway import SynthesisGateway
from .tts.models import SynthesisRequest

_gateways: dict[str | None, SynthesisGateway] = {}


def _gateway_for(api_key: str | None) -> SynthesisGateway:
    # One gateway per key so repeated calls share the result cache
    if api_key not in _gateways:
        _gateways[api_key] = SynthesisGateway(GeminiProvider(api_key=api_key))
    return _gateways[api_key]


async def synthesize(
    text: str,
    voice: str | None = None,
    model: str | None = None,
    wav: bool = True,
    output: str | Path | None = None,
    api_key: str | None = None,
) -> bytes:
    """Synthesize speech from text.

    Args:
        text: Text to speak
        voice: Prebuilt voice name (defaults to "Kore")
        model: Gemini TTS model (defaults to gemini-2.5-flash-preview-tts)
        wav: Return a WAV file; raw 24 kHz mono PCM when False
        output: Optional file path the audio is also written to
        api_key: Gemini API key (falls back to GEMINI_API_KEY/GOOGLE_API_KEY)

    Returns:
        Audio bytes

    Raises:
        ValidationError: If text is empty
        UpstreamError: If the API key is missing or synthesis fails
        OSError: If file save fails
    """
    request = SynthesisRequest.build(
        text,
        voice,
        model,
        default_voice=DEFAULT_VOICE,
        default_model=DEFAULT_MODEL,
    )
    audio = await _gateway_for(api_key).synthesize(request, want_wav=wav)

    if output:
        Path(output).write_bytes(audio)

    return audio
