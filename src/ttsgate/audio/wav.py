"""WAV container encoding for raw PCM audio."""

import struct
from typing import NamedTuple

WAV_HEADER_SIZE = 44

# RIFF/WAVE canonical header, all integers little-endian
_HEADER_FORMAT = "<4sI4s4sIHHIIHH4sI"


class AudioFormat(NamedTuple):
    """PCM sample layout."""

    sample_rate: int
    channels: int
    bits_per_sample: int

    @property
    def block_align(self) -> int:
        return self.channels * self.bits_per_sample // 8

    @property
    def byte_rate(self) -> int:
        return self.sample_rate * self.block_align


# The only profile the backend produces: 16-bit mono at 24 kHz
DEFAULT_FORMAT = AudioFormat(sample_rate=24000, channels=1, bits_per_sample=16)


class WavHeader(NamedTuple):
    """Decoded fields of a canonical 44-byte WAV header."""

    riff_size: int
    audio_format: int
    channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    data_size: int


def encode_wav(
    pcm: bytes,
    sample_rate: int = DEFAULT_FORMAT.sample_rate,
    channels: int = DEFAULT_FORMAT.channels,
    bits_per_sample: int = DEFAULT_FORMAT.bits_per_sample,
) -> bytes:
    """Wrap raw PCM bytes in a canonical RIFF/WAVE container.

    The PCM data is not inspected; any byte sequence, including an empty
    one, yields a well-formed file of ``44 + len(pcm)`` bytes.

    Args:
        pcm: Raw PCM sample data
        sample_rate: Samples per second
        channels: Number of interleaved channels
        bits_per_sample: Sample width in bits

    Returns:
        Header followed by the unmodified PCM data
    """
    fmt = AudioFormat(sample_rate, channels, bits_per_sample)
    header = struct.pack(
        _HEADER_FORMAT,
        b"RIFF",
        36 + len(pcm),
        b"WAVE",
        b"fmt ",
        16,
        1,
        fmt.channels,
        fmt.sample_rate,
        fmt.byte_rate,
        fmt.block_align,
        fmt.bits_per_sample,
        b"data",
        len(pcm),
    )
    return header + bytes(pcm)


def read_wav_header(data: bytes) -> WavHeader:
    """Parse the canonical 44-byte header at the start of ``data``.

    Raises:
        ValueError: If the buffer is too short or is not a PCM WAV file
    """
    if len(data) < WAV_HEADER_SIZE:
        raise ValueError(
            f"WAV data too short: {len(data)} bytes, need {WAV_HEADER_SIZE}"
        )

    (
        riff,
        riff_size,
        wave,
        fmt_id,
        fmt_size,
        audio_format,
        channels,
        sample_rate,
        byte_rate,
        block_align,
        bits_per_sample,
        data_id,
        data_size,
    ) = struct.unpack(_HEADER_FORMAT, data[:WAV_HEADER_SIZE])

    if riff != b"RIFF" or wave != b"WAVE":
        raise ValueError("Not a RIFF/WAVE file")
    if fmt_id != b"fmt " or fmt_size != 16 or data_id != b"data":
        raise ValueError("Unsupported WAV layout")

    return WavHeader(
        riff_size=riff_size,
        audio_format=audio_format,
        channels=channels,
        sample_rate=sample_rate,
        byte_rate=byte_rate,
        block_align=block_align,
        bits_per_sample=bits_per_sample,
        data_size=data_size,
    )
