"""Unit tests for GeminiProvider error handling and payload extraction."""

import base64
import os
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from ttsgate.providers.gemini import (
    NO_AUDIO_MESSAGE,
    GeminiProvider,
    decode_audio_data,
    extract_audio_data,
)
from ttsgate.tts.errors import UpstreamError


class TestGeminiProviderInitialization:
    """Test GeminiProvider initialization and credential handling."""

    def test_initialization_with_provided_api_key(self) -> None:
        with patch("ttsgate.providers.gemini.genai") as mock_genai:
            provider = GeminiProvider(api_key="test_key")

            mock_genai.Client.assert_called_once_with(api_key="test_key")
            assert provider._client == mock_genai.Client.return_value

    def test_initialization_with_env_var_api_key(self) -> None:
        with patch.dict(os.environ, {"GEMINI_API_KEY": "env_key"}):
            with patch("ttsgate.providers.gemini.genai") as mock_genai:
                GeminiProvider()

                mock_genai.Client.assert_called_once_with(api_key="env_key")

    def test_google_api_key_fallback(self) -> None:
        with patch.dict(os.environ, {"GOOGLE_API_KEY": "google_key"}):
            with patch("ttsgate.providers.gemini.genai") as mock_genai:
                GeminiProvider()

                mock_genai.Client.assert_called_once_with(api_key="google_key")

    def test_initialization_no_api_key_raises(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(UpstreamError, match="Gemini API key not found"):
                GeminiProvider()

    def test_client_failure_raises_upstream_error(self) -> None:
        with patch("ttsgate.providers.gemini.genai") as mock_genai:
            mock_genai.Client.side_effect = Exception("bad key format")

            with pytest.raises(UpstreamError, match="Failed to initialize Gemini client"):
                GeminiProvider(api_key="invalid")


class TestGeminiProviderSynthesize:
    """Test GeminiProvider.synthesize against a stubbed SDK client."""

    def setup_method(self) -> None:
        self.client = MagicMock()
        self.provider = GeminiProvider(client=self.client)

    @pytest.mark.asyncio
    async def test_base64_payload_is_decoded(self, genai_response) -> None:
        """Test that base64 text from the wire becomes raw PCM."""
        encoded = base64.b64encode(b"\x00\x00\x00\x00").decode()
        self.client.models.generate_content.return_value = genai_response(encoded)

        pcm = await self.provider.synthesize("Hello", "Kore", "m1")

        assert pcm == b"\x00\x00\x00\x00"

    @pytest.mark.asyncio
    async def test_bytes_payload_passes_through(self, genai_response) -> None:
        self.client.models.generate_content.return_value = genai_response(b"\x01\x02")

        assert await self.provider.synthesize("Hello", "Kore", "m1") == b"\x01\x02"

    @pytest.mark.asyncio
    async def test_request_asks_for_audio_with_voice(self, genai_response) -> None:
        self.client.models.generate_content.return_value = genai_response(b"\x00\x00")

        await self.provider.synthesize("Hello", "Puck", "gemini-tts")

        kwargs = self.client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-tts"
        assert kwargs["contents"] == "Hello"
        config = kwargs["config"]
        assert [str(m).upper().split(".")[-1] for m in config.response_modalities] == ["AUDIO"]
        assert config.speech_config.voice_config.prebuilt_voice_config.voice_name == "Puck"

    @pytest.mark.asyncio
    async def test_missing_audio_raises_no_audio_error(self, genai_response) -> None:
        self.client.models.generate_content.return_value = genai_response(None)

        with pytest.raises(UpstreamError, match=NO_AUDIO_MESSAGE):
            await self.provider.synthesize("Hello", "Kore", "m1")

    @pytest.mark.asyncio
    async def test_empty_candidates_raise_no_audio_error(self) -> None:
        self.client.models.generate_content.return_value = SimpleNamespace(candidates=[])

        with pytest.raises(UpstreamError, match=NO_AUDIO_MESSAGE):
            await self.provider.synthesize("Hello", "Kore", "m1")

    @pytest.mark.asyncio
    async def test_sdk_exception_becomes_upstream_error(self) -> None:
        error = Exception("429 RESOURCE_EXHAUSTED")
        error.code = 429
        self.client.models.generate_content.side_effect = error

        with pytest.raises(UpstreamError, match="API call failed") as exc_info:
            await self.provider.synthesize("Hello", "Kore", "m1")

        assert exc_info.value.status_code == 429
        assert exc_info.value.original_error is error


class TestPayloadHelpers:
    def test_extract_tolerates_missing_links(self) -> None:
        assert extract_audio_data(None) is None
        assert extract_audio_data(SimpleNamespace(candidates=None)) is None
        no_parts = SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[]))])
        assert extract_audio_data(no_parts) is None
        no_inline = SimpleNamespace(
            candidates=[
                SimpleNamespace(content=SimpleNamespace(parts=[SimpleNamespace(inline_data=None)]))
            ]
        )
        assert extract_audio_data(no_inline) is None

    def test_extract_uses_first_part_only(self) -> None:
        first = SimpleNamespace(inline_data=SimpleNamespace(data=b"first"))
        second = SimpleNamespace(inline_data=SimpleNamespace(data=b"second"))
        response = SimpleNamespace(
            candidates=[SimpleNamespace(content=SimpleNamespace(parts=[first, second]))]
        )

        assert extract_audio_data(response) == b"first"

    def test_invalid_base64_raises(self) -> None:
        with pytest.raises(UpstreamError, match="Invalid audio payload encoding"):
            decode_audio_data("not base64!!")
