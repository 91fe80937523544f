"""Synthesis request models with validation."""

from dataclasses import dataclass

from .errors import ValidationError

MISSING_TEXT_MESSAGE = 'Missing required "text" string.'


@dataclass(frozen=True)
class SynthesisRequest:
    """A validated text-to-speech request.

    Args:
        text: Text to speak, stored trimmed
        voice: Prebuilt voice name (e.g., "Kore")
        model: Backend model identifier
    """

    text: str
    voice: str
    model: str

    def __post_init__(self) -> None:
        """Validate and normalize request fields."""
        if not isinstance(self.text, str) or not self.text.strip():
            raise ValidationError(MISSING_TEXT_MESSAGE)
        if not self.voice or not self.voice.strip():
            raise ValidationError("voice cannot be empty")
        if not self.model or not self.model.strip():
            raise ValidationError("model cannot be empty")
        # Frozen dataclass, so normalize through object.__setattr__
        object.__setattr__(self, "text", self.text.strip())

    @classmethod
    def build(
        cls,
        text: str | None,
        voice: str | None,
        model: str | None,
        default_voice: str,
        default_model: str,
    ) -> "SynthesisRequest":
        """Create a request, falling back to server defaults for voice and model.

        Raises:
            ValidationError: If text is missing or blank
        """
        if text is None:
            raise ValidationError(MISSING_TEXT_MESSAGE)
        return cls(
            text=text,
            voice=voice or default_voice,
            model=model or default_model,
        )
