"""Configuration management for ttsgate.

Loads optional settings from ~/.config/ttsgate/config.toml.
Priority chain: CLI flags > env vars > config file > defaults.
The API key is only ever read from the environment.
"""

import os
import sys
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path

CONFIG_DIR = Path.home() / ".config" / "ttsgate"
CONFIG_PATH = CONFIG_DIR / "config.toml"

DEFAULT_MODEL = "gemini-2.5-flash-preview-tts"
DEFAULT_VOICE = "Kore"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_AUDIO_DIR = Path("public") / "audio"

DEFAULT_CONFIG = """\
# ttsgate configuration

[tts]
# Gemini TTS model and prebuilt voice used when a request omits them
model = "gemini-2.5-flash-preview-tts"
voice = "Kore"

[http]
host = "0.0.0.0"
port = 3000

# Directory of generated WAV files served under /audio
audio_dir = "public/audio"

[webhook]
# Shared secret expected in the X-VAPI-SECRET header (unset = no check)
# secret = "change-me"

# API keys are read from environment variables, not this file:
#   GEMINI_API_KEY or GOOGLE_API_KEY
"""


@dataclass(frozen=True)
class TTSConfig:
    """Backend defaults."""

    model: str
    voice: str


@dataclass(frozen=True)
class HTTPConfig:
    """HTTP server configuration."""

    host: str
    port: int
    audio_dir: Path


@dataclass(frozen=True)
class WebhookConfig:
    """Raw PCM webhook configuration."""

    secret: str | None


@dataclass(frozen=True)
class GatewayConfig:
    """Top-level ttsgate configuration."""

    api_key: str
    tts: TTSConfig
    http: HTTPConfig
    webhook: WebhookConfig

    def with_overrides(
        self, host: str | None = None, port: int | None = None
    ) -> "GatewayConfig":
        """Return a copy with CLI flag overrides applied."""
        http = replace(
            self.http,
            host=host if host is not None else self.http.host,
            port=port if port is not None else self.http.port,
        )
        return replace(self, http=http)


_cached_config: GatewayConfig | None = None


def generate_config() -> Path:
    """Write the default config file to ~/.config/ttsgate/config.toml."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    CONFIG_PATH.write_text(DEFAULT_CONFIG)
    return CONFIG_PATH


def reset_config() -> None:
    """Forget the memoized configuration."""
    global _cached_config
    _cached_config = None


def _read_config_file(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        print(f"Invalid config file {path}: {e}", file=sys.stderr)
        raise SystemExit(1) from e


def load_config(config_path: Path | None = None) -> GatewayConfig:
    """Load configuration from env vars with optional config file values.

    Args:
        config_path: Config file to read (defaults to CONFIG_PATH)

    Returns:
        Loaded and validated GatewayConfig.

    Raises:
        SystemExit: If the API key is missing or a value is invalid.
    """
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    api_key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
    if not api_key:
        print("Missing GEMINI_API_KEY or GOOGLE_API_KEY in environment", file=sys.stderr)
        raise SystemExit(1)

    data = _read_config_file(config_path or CONFIG_PATH)
    tts = data.get("tts", {})
    http_cfg = data.get("http", {})
    webhook = data.get("webhook", {})

    port_str = os.getenv("PORT") or str(http_cfg.get("port", DEFAULT_PORT))
    try:
        port = int(port_str)
    except ValueError as e:
        print(f"Invalid port: {port_str!r}", file=sys.stderr)
        raise SystemExit(1) from e

    # Env vars override config file values
    _cached_config = GatewayConfig(
        api_key=api_key,
        tts=TTSConfig(
            model=os.getenv("MODEL") or tts.get("model", DEFAULT_MODEL),
            voice=os.getenv("VOICE") or tts.get("voice", DEFAULT_VOICE),
        ),
        http=HTTPConfig(
            host=os.getenv("HOST") or http_cfg.get("host", DEFAULT_HOST),
            port=port,
            audio_dir=Path(
                os.getenv("AUDIO_DIR") or http_cfg.get("audio_dir", DEFAULT_AUDIO_DIR)
            ),
        ),
        webhook=WebhookConfig(
            secret=os.getenv("VAPI_SECRET") or webhook.get("secret") or None,
        ),
    )

    return _cached_config
