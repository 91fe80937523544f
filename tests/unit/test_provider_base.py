"""Unit tests for TTSProvider abstract base class."""

import pytest

from ttsgate.providers.base import TTSProvider


class TestTTSProviderAbstractClass:
    """Test TTSProvider abstract base class behavior."""

    def test_cannot_instantiate_abstract_class(self) -> None:
        """Test that TTSProvider cannot be instantiated directly."""
        with pytest.raises(TypeError) as exc_info:
            TTSProvider()

        error_msg = str(exc_info.value)
        assert "abstract" in error_msg.lower()
        assert "synthesize" in error_msg

    def test_abstract_methods_defined(self) -> None:
        assert TTSProvider.__abstractmethods__ == frozenset({"synthesize"})

    @pytest.mark.asyncio
    async def test_complete_implementation_succeeds(self) -> None:
        class ConcreteProvider(TTSProvider):
            async def synthesize(self, text: str, voice: str, model: str) -> bytes:
                return b"\x00\x00"

        provider = ConcreteProvider()

        assert await provider.synthesize("Hello", "Kore", "m1") == b"\x00\x00"
