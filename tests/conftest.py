"""Pytest configuration and fixtures for ttsgate tests."""

from collections.abc import Callable, Iterator
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest

from ttsgate import config as config_module
from ttsgate.config import GatewayConfig, HTTPConfig, TTSConfig, WebhookConfig
from ttsgate.providers.base import TTSProvider

FOUR_ZERO_BYTES = b"\x00\x00\x00\x00"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubProvider(TTSProvider):
    """Backend stub that records calls and returns fixed PCM."""

    def __init__(self, pcm: bytes = FOUR_ZERO_BYTES) -> None:
        self.pcm = pcm
        self.calls: list[tuple[str, str, str]] = []
        self.failures: dict[str, Exception] = {}

    async def synthesize(self, text: str, voice: str, model: str) -> bytes:
        self.calls.append((text, voice, model))
        if text in self.failures:
            raise self.failures[text]
        return self.pcm


@pytest.fixture(autouse=True)
def isolate_config(monkeypatch, tmp_path: Path) -> Iterator[None]:
    """Keep every test away from the real config file, env and memoized config."""
    for name in (
        "GEMINI_API_KEY",
        "GOOGLE_API_KEY",
        "MODEL",
        "VOICE",
        "HOST",
        "PORT",
        "AUDIO_DIR",
        "VAPI_SECRET",
    ):
        monkeypatch.delenv(name, raising=False)

    config_dir = tmp_path / "config"
    monkeypatch.setattr(config_module, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config_module, "CONFIG_PATH", config_dir / "config.toml")
    config_module.reset_config()
    yield
    config_module.reset_config()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def stub_provider() -> StubProvider:
    return StubProvider()


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., GatewayConfig]:
    """Factory for configs pointing at a temporary audio directory."""

    def _make(secret: str | None = None) -> GatewayConfig:
        return GatewayConfig(
            api_key="test-key",
            tts=TTSConfig(model="default-model", voice="Kore"),
            http=HTTPConfig(host="127.0.0.1", port=3000, audio_dir=tmp_path / "audio"),
            webhook=WebhookConfig(secret=secret),
        )

    return _make


@pytest.fixture
def genai_response() -> Callable[[Any], SimpleNamespace]:
    """Factory for objects shaped like a google-genai GenerateContentResponse."""

    def _make(data: Any) -> SimpleNamespace:
        part = SimpleNamespace(inline_data=SimpleNamespace(data=data))
        candidate = SimpleNamespace(content=SimpleNamespace(parts=[part]))
        return SimpleNamespace(candidates=[candidate])

    return _make
