"""HTTP server for ttsgate."""

import logging

import uvicorn

from ..config import GatewayConfig
from .app import create_app

__all__ = ["create_app", "run_server"]

logger = logging.getLogger(__name__)


def run_server(config: GatewayConfig, debug: bool = False) -> None:
    """Build the app and serve it with uvicorn until interrupted."""
    app = create_app(config)

    logger.info(f"✓ TTS server listening on http://{config.http.host}:{config.http.port}")
    logger.info(
        "Routes: POST /tts, POST /tts-url, POST /batch-url, POST /vapi-tts, "
        "GET /health, GET /audio/<file>"
    )

    uvicorn.run(
        app,
        host=config.http.host,
        port=config.http.port,
        log_level="debug" if debug else "info",
        proxy_headers=True,
        forwarded_allow_ips="*",
    )
