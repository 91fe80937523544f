"""Unit tests for the high-level synthesize() API."""

from unittest.mock import patch

import pytest

import ttsgate
from ttsgate import api
from ttsgate.config import DEFAULT_MODEL, DEFAULT_VOICE
from ttsgate.tts.errors import ValidationError


@pytest.fixture(autouse=True)
def fresh_gateways():
    api._gateways.clear()
    yield
    api._gateways.clear()


class TestSynthesizeAPI:
    @pytest.mark.asyncio
    async def test_returns_wav_with_defaults(self, stub_provider) -> None:
        with patch("ttsgate.api.GeminiProvider", return_value=stub_provider) as provider_cls:
            audio = await api.synthesize("Hello", api_key="k")

        provider_cls.assert_called_once_with(api_key="k")
        assert audio[:4] == b"RIFF"
        assert stub_provider.calls == [("Hello", DEFAULT_VOICE, DEFAULT_MODEL)]

    @pytest.mark.asyncio
    async def test_raw_pcm_and_output_file(self, stub_provider, tmp_path) -> None:
        output = tmp_path / "clip.pcm"
        with patch("ttsgate.api.GeminiProvider", return_value=stub_provider):
            audio = await api.synthesize("Hi", voice="Puck", model="m1", wav=False, output=output)

        assert audio == stub_provider.pcm
        assert output.read_bytes() == audio

    @pytest.mark.asyncio
    async def test_repeat_calls_share_cache(self, stub_provider) -> None:
        with patch("ttsgate.api.GeminiProvider", return_value=stub_provider):
            await api.synthesize("Hello", api_key="k")
            await api.synthesize("Hello", api_key="k")

        assert len(stub_provider.calls) == 1

    @pytest.mark.asyncio
    async def test_blank_text_raises(self) -> None:
        with pytest.raises(ValidationError):
            await api.synthesize("   ")


def test_package_level_lazy_export() -> None:
    assert ttsgate.synthesize is api.synthesize

    with pytest.raises(AttributeError):
        ttsgate.does_not_exist
