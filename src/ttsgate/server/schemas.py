"""Request and response bodies for the HTTP API."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class SpeechBody(BaseModel):
    """Body shared by /tts-url and each /batch-url item.

    ``text`` is optional here so a missing value reaches the gateway's own
    validation and gets the same 400 message as a blank one.
    Numeric text is accepted and synthesized as its string form.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    text: str | None = None
    voice: str | None = None
    model: str | None = None


class TTSBody(SpeechBody):
    """Body of POST /tts."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)

    return_format: str | None = Field(default=None, alias="return")


class BatchBody(BaseModel):
    """Body of POST /batch-url.

    Items stay untyped so one malformed item fails alone instead of failing
    the whole request.
    """

    model_config = ConfigDict(extra="ignore")

    items: Any = None


class VoiceRequestMessage(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)

    type: str | None = None
    text: str | None = None
    sample_rate: int | None = Field(default=None, alias="sampleRate")


class VoiceRequestBody(BaseModel):
    """Body of POST /vapi-tts."""

    model_config = ConfigDict(extra="ignore")

    message: VoiceRequestMessage | None = None


class AudioFormatFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sample_rate: int = Field(serialization_alias="sampleRate")
    channels: int
    model: str
    voice: str


class Base64Audio(AudioFormatFields):
    audio: str
    mime_type: Literal["audio/wav"] = Field(
        default="audio/wav", serialization_alias="mimeType"
    )


class AudioURL(AudioFormatFields):
    url: str


class Health(BaseModel):
    ok: bool = True
    uptime: float
    model: str
    voice: str
