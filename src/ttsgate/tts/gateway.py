"""Synthesis gateway for ttsgate.

Coordinates the TTS provider, the result cache and the WAV encoder so every
HTTP route shares one path from text to audio bytes.
"""

import asyncio
import logging

from ..audio.wav import DEFAULT_FORMAT, encode_wav
from ..cache.manager import ResultCache, make_fingerprint
from ..cache.models import PayloadKind
from ..providers.base import TTSProvider
from .errors import UpstreamError
from .models import SynthesisRequest

logger = logging.getLogger(__name__)


class SynthesisGateway:
    """Turns synthesis requests into WAV or raw PCM bytes.

    Handles cache lookup, backend synthesis, WAV wrapping and cache storage
    in a single coordinated workflow. No lock is held across the backend
    call; concurrent misses for the same fingerprint share one pending
    backend call unless ``dedupe_inflight`` is disabled.

    Example:
        gateway = SynthesisGateway(GeminiProvider(api_key))
        request = SynthesisRequest(text="Hello", voice="Kore", model="m1")

        wav = await gateway.synthesize(request, want_wav=True)
        pcm = await gateway.synthesize(request, want_wav=False)
    """

    def __init__(
        self,
        provider: TTSProvider,
        cache: ResultCache | None = None,
        dedupe_inflight: bool = True,
    ) -> None:
        """Initialize gateway.

        Args:
            provider: Backend that returns raw PCM for text
            cache: Result cache (a fresh 10 minute cache when omitted)
            dedupe_inflight: Share one backend call between concurrent
                misses for the same fingerprint
        """
        self.provider = provider
        self.cache = cache if cache is not None else ResultCache()
        self.dedupe_inflight = dedupe_inflight
        self._inflight: dict[str, asyncio.Task[bytes]] = {}

    async def synthesize(self, request: SynthesisRequest, want_wav: bool = True) -> bytes:
        """Return audio for ``request``, from cache when possible.

        Args:
            request: Validated text, voice and model
            want_wav: Wrap the PCM in a WAV container

        Returns:
            WAV file bytes, or raw PCM when ``want_wav`` is False

        Raises:
            UpstreamError: If the backend fails or returns no audio
        """
        kind = PayloadKind.WAV if want_wav else PayloadKind.PCM
        key = make_fingerprint(kind, request.model, request.voice, request.text)

        cached = self.cache.get(key)
        if cached is not None:
            return cached

        if not self.dedupe_inflight:
            return await self._produce(request, kind, key)

        pending = self._inflight.get(key)
        if pending is None:
            pending = asyncio.ensure_future(self._produce(request, kind, key))
            self._inflight[key] = pending
            pending.add_done_callback(lambda task: self._forget(key, task))
        else:
            logger.debug(f"Joining in-flight synthesis for {key[:80]}")

        # Shield so one cancelled caller does not cancel the shared call
        return await asyncio.shield(pending)

    def _forget(self, key: str, task: "asyncio.Task[bytes]") -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]

    async def _produce(
        self, request: SynthesisRequest, kind: PayloadKind, key: str
    ) -> bytes:
        """Call the backend, shape the payload and store it."""
        logger.debug(
            f"Calling backend model={request.model} voice={request.voice} "
            f"for '{request.text[:50]}{'...' if len(request.text) > 50 else ''}'"
        )
        pcm = await self.provider.synthesize(request.text, request.voice, request.model)

        if len(pcm) % DEFAULT_FORMAT.block_align:
            raise UpstreamError(
                f"Model returned malformed PCM: {len(pcm)} bytes is not a whole "
                f"number of {DEFAULT_FORMAT.bits_per_sample}-bit samples"
            )

        if kind is PayloadKind.WAV:
            payload = encode_wav(
                pcm,
                DEFAULT_FORMAT.sample_rate,
                DEFAULT_FORMAT.channels,
                DEFAULT_FORMAT.bits_per_sample,
            )
        else:
            payload = pcm

        self.cache.set(key, payload)
        logger.info(f"Synthesized {len(payload)} bytes of {kind.value} audio")
        return payload
