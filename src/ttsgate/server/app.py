"""FastAPI application factory for ttsgate."""

import logging
import time

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ..assets import ASSET_URL_PREFIX, AssetStore, LocalAssetStore
from ..config import GatewayConfig
from ..core import build_asset_store, build_gateway
from ..tts.errors import UnauthorizedError, UpstreamError, ValidationError
from ..tts.gateway import SynthesisGateway
from .routes import router

logger = logging.getLogger(__name__)

MAX_BODY_BYTES = 2 * 1024 * 1024
BODY_TOO_LARGE_MESSAGE = "Request body too large"


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def _request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "detail": jsonable_encoder(exc.errors())},
    )


async def _unauthorized_error(request: Request, exc: UnauthorizedError) -> JSONResponse:
    return JSONResponse(status_code=401, content={"error": "Unauthorized"})


async def _upstream_error(request: Request, exc: UpstreamError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} error: {exc}")
    return JSONResponse(status_code=500, content={"error": "TTS failed", "detail": str(exc)})


class BodyTooLarge(HTTPException):
    """Raised while reading a request body that exceeds the size limit."""

    def __init__(self) -> None:
        super().__init__(status_code=413, detail=BODY_TOO_LARGE_MESSAGE)


async def _body_too_large(request: Request, exc: BodyTooLarge) -> JSONResponse:
    return JSONResponse(status_code=413, content={"error": BODY_TOO_LARGE_MESSAGE})


class BodySizeLimitMiddleware:
    """Reject request bodies over ``max_bytes``.

    A declared Content-Length is checked up front. Bodies without one
    (chunked uploads) are counted as they stream in, and reading past the
    limit raises ``BodyTooLarge`` inside the handler that consumes them.
    """

    def __init__(self, app: ASGIApp, max_bytes: int = MAX_BODY_BYTES) -> None:
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        length = Headers(scope=scope).get("content-length")
        if length is not None and length.isdigit() and int(length) > self.max_bytes:
            response = JSONResponse(status_code=413, content={"error": BODY_TOO_LARGE_MESSAGE})
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    logger.warning(f"Request body exceeded {self.max_bytes} bytes")
                    raise BodyTooLarge()
            return message

        await self.app(scope, limited_receive, send)


def create_app(
    config: GatewayConfig,
    gateway: SynthesisGateway | None = None,
    asset_store: AssetStore | None = None,
) -> FastAPI:
    """Build the HTTP application.

    Args:
        config: Loaded configuration
        gateway: Synthesis gateway (built from config when omitted)
        asset_store: Store for URL-returned audio (local directory when omitted)

    Returns:
        Configured FastAPI app with routes, error handlers and /audio mount
    """
    app = FastAPI(title="ttsgate")

    app.state.config = config
    app.state.gateway = gateway if gateway is not None else build_gateway(config)
    app.state.asset_store = (
        asset_store if asset_store is not None else build_asset_store(config)
    )
    app.state.started_at = time.monotonic()

    app.add_middleware(BodySizeLimitMiddleware, max_bytes=MAX_BODY_BYTES)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(UnauthorizedError, _unauthorized_error)
    app.add_exception_handler(UpstreamError, _upstream_error)
    app.add_exception_handler(BodyTooLarge, _body_too_large)

    app.include_router(router)

    store = app.state.asset_store
    if isinstance(store, LocalAssetStore):
        app.mount(
            ASSET_URL_PREFIX,
            StaticFiles(directory=str(store.directory)),
            name="audio",
        )

    return app
