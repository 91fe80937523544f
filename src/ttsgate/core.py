"""Core wiring for ttsgate - builds the provider, cache and gateway."""

import logging

from .assets import LocalAssetStore
from .cache.manager import ResultCache
from .config import GatewayConfig
from .providers.base import TTSProvider
from .providers.gemini import GeminiProvider
from .tts.gateway import SynthesisGateway

logger = logging.getLogger(__name__)


def build_gateway(
    config: GatewayConfig,
    provider: TTSProvider | None = None,
    cache: ResultCache | None = None,
) -> SynthesisGateway:
    """Create the long-lived synthesis gateway for a process.

    Args:
        config: Loaded configuration (supplies the API key)
        provider: Backend override; a GeminiProvider when omitted
        cache: Cache override; a fresh 10 minute cache when omitted

    Raises:
        UpstreamError: If the Gemini client cannot be created
    """
    if provider is None:
        provider = GeminiProvider(api_key=config.api_key)
        logger.debug("Created Gemini provider")

    return SynthesisGateway(provider=provider, cache=cache)


def build_asset_store(config: GatewayConfig) -> LocalAssetStore:
    """Create the asset store rooted at the configured audio directory."""
    store = LocalAssetStore(config.http.audio_dir)
    logger.debug(f"Serving audio assets from {store.directory.resolve()}")
    return store
