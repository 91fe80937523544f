"""HTTP request handlers.

Each route translates its inbound body into gateway calls and shapes the
gateway's bytes into the response the caller asked for.
"""

import asyncio
import base64
import hmac
import logging
import time
from typing import Any

from fastapi import APIRouter, Depends, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel
from pydantic import ValidationError as BodyValidationError

from ..assets import AssetStore
from ..audio.wav import DEFAULT_FORMAT
from ..config import GatewayConfig
from ..tts.errors import UnauthorizedError, ValidationError
from ..tts.gateway import SynthesisGateway
from ..tts.models import SynthesisRequest
from .schemas import (
    AudioURL,
    Base64Audio,
    BatchBody,
    Health,
    SpeechBody,
    TTSBody,
    VoiceRequestBody,
)

logger = logging.getLogger(__name__)

router = APIRouter()

BANNER = (
    "Gemini TTS server ready. Endpoints: POST /tts, POST /tts-url, "
    "POST /batch-url, POST /vapi-tts, GET /health"
)
BATCH_ITEMS_MESSAGE = "Provide items: an array of { text, voice?, model? }"
VOICE_REQUEST_TYPE = "voice-request"
INVALID_ITEM_MESSAGE = "Invalid item"


def get_config(request: Request) -> GatewayConfig:
    return request.app.state.config


def get_gateway(request: Request) -> SynthesisGateway:
    return request.app.state.gateway


def get_asset_store(request: Request) -> AssetStore:
    return request.app.state.asset_store


def _first_header_value(value: str | None) -> str | None:
    if not value:
        return None
    return value.split(",")[0].strip() or None


def public_origin(request: Request) -> str:
    """Externally visible scheme and host, honoring reverse-proxy headers."""
    proto = (
        _first_header_value(request.headers.get("x-forwarded-proto"))
        or request.url.scheme
    )
    host = (
        _first_header_value(request.headers.get("x-forwarded-host"))
        or request.headers.get("host")
        or request.url.netloc
    )
    return f"{proto}://{host}"


def build_request(body: SpeechBody, config: GatewayConfig) -> SynthesisRequest:
    return SynthesisRequest.build(
        body.text,
        body.voice,
        body.model,
        default_voice=config.tts.voice,
        default_model=config.tts.model,
    )


async def synthesize_to_url(
    body: SpeechBody,
    request: Request,
    config: GatewayConfig,
    gateway: SynthesisGateway,
    store: AssetStore,
) -> dict[str, Any]:
    """Synthesize one WAV, persist it and describe where to fetch it."""
    speech = build_request(body, config)
    wav = await gateway.synthesize(speech, want_wav=True)
    asset = await store.put(wav)

    return AudioURL(
        url=f"{public_origin(request)}{asset.url_path}",
        sample_rate=DEFAULT_FORMAT.sample_rate,
        channels=DEFAULT_FORMAT.channels,
        model=speech.model,
        voice=speech.voice,
    ).model_dump(by_alias=True)


def require_webhook_secret(
    config: GatewayConfig = Depends(get_config),
    x_vapi_secret: str | None = Header(default=None),
) -> None:
    """Reject the request unless the shared secret matches, when one is set."""
    expected = config.webhook.secret
    if not expected:
        return
    if x_vapi_secret is None or not hmac.compare_digest(
        x_vapi_secret.encode(), expected.encode()
    ):
        logger.warning("Rejected webhook request with bad secret")
        raise UnauthorizedError()


@router.get("/", response_class=PlainTextResponse)
async def index() -> str:
    return BANNER


@router.get("/health")
async def health(
    request: Request, config: GatewayConfig = Depends(get_config)
) -> dict[str, Any]:
    uptime = time.monotonic() - request.app.state.started_at
    return Health(uptime=uptime, model=config.tts.model, voice=config.tts.voice).model_dump()


@router.post("/tts")
async def tts(
    body: TTSBody,
    config: GatewayConfig = Depends(get_config),
    gateway: SynthesisGateway = Depends(get_gateway),
) -> Response:
    """Synthesize and return WAV bytes, or a base64 JSON envelope."""
    speech = build_request(body, config)
    wav = await gateway.synthesize(speech, want_wav=True)

    if body.return_format == "base64":
        return JSONResponse(
            Base64Audio(
                audio=base64.b64encode(wav).decode("ascii"),
                sample_rate=DEFAULT_FORMAT.sample_rate,
                channels=DEFAULT_FORMAT.channels,
                model=speech.model,
                voice=speech.voice,
            ).model_dump(by_alias=True)
        )

    return Response(
        content=wav,
        media_type="audio/wav",
        headers={"Content-Disposition": 'inline; filename="speech.wav"'},
    )


@router.post("/tts-url")
async def tts_url(
    body: SpeechBody,
    request: Request,
    config: GatewayConfig = Depends(get_config),
    gateway: SynthesisGateway = Depends(get_gateway),
    store: AssetStore = Depends(get_asset_store),
) -> dict[str, Any]:
    """Synthesize, persist and return a public URL."""
    return await synthesize_to_url(body, request, config, gateway, store)


@router.post("/batch-url")
async def batch_url(
    body: BatchBody,
    request: Request,
    config: GatewayConfig = Depends(get_config),
    gateway: SynthesisGateway = Depends(get_gateway),
    store: AssetStore = Depends(get_asset_store),
) -> dict[str, Any]:
    """Synthesize many clips concurrently; each item succeeds or fails alone."""
    if not isinstance(body.items, list) or not body.items:
        raise ValidationError(BATCH_ITEMS_MESSAGE)

    async def run_item(raw: Any) -> dict[str, Any]:
        try:
            item = SpeechBody.model_validate(raw if isinstance(raw, dict) else {})
        except BodyValidationError as e:
            logger.warning(f"Batch item rejected: {e.error_count()} validation error(s)")
            return {"error": INVALID_ITEM_MESSAGE}

        try:
            if not (item.text or "").strip():
                return {"error": "Missing text"}
            return await synthesize_to_url(item, request, config, gateway, store)
        except Exception as e:
            logger.error(f"Batch item failed: {e}")
            return {"error": str(e) or "synthesis failed"}

    results = await asyncio.gather(*(run_item(raw) for raw in body.items))
    return {"results": list(results)}


async def read_body(request: Request, schema: type[BaseModel]) -> Any:
    """Parse and validate a JSON body inside the handler.

    A route that reads its body this way runs its dependencies, such as
    the webhook secret check, before the body is parsed.
    """
    try:
        payload = await request.json()
    except ValueError as e:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": {}}]
        ) from e

    try:
        return schema.model_validate(payload)
    except BodyValidationError as e:
        raise RequestValidationError(e.errors(include_url=False)) from e


@router.post("/vapi-tts", dependencies=[Depends(require_webhook_secret)])
async def vapi_tts(
    request: Request,
    config: GatewayConfig = Depends(get_config),
    gateway: SynthesisGateway = Depends(get_gateway),
) -> Response:
    """Return raw PCM for a voice-request webhook, always in the default voice."""
    body = await read_body(request, VoiceRequestBody)
    message = body.message
    if message is None or message.type != VOICE_REQUEST_TYPE:
        raise ValidationError("Invalid message type")
    if message.sample_rate != DEFAULT_FORMAT.sample_rate:
        raise ValidationError(
            f"Unsupported sampleRate {message.sample_rate}; "
            f"only {DEFAULT_FORMAT.sample_rate} is supported"
        )

    # Per-request voice/model overrides are not honored on this route
    speech = SynthesisRequest.build(
        message.text,
        None,
        None,
        default_voice=config.tts.voice,
        default_model=config.tts.model,
    )
    pcm = await gateway.synthesize(speech, want_wav=False)

    return Response(content=pcm, media_type="application/octet-stream")
