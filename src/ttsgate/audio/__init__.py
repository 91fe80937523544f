"""Audio container package for ttsgate.

This package wraps raw PCM returned by the speech backend in WAV containers.
"""

from .wav import DEFAULT_FORMAT, AudioFormat, WavHeader, encode_wav, read_wav_header

__all__ = [
    "DEFAULT_FORMAT",
    "AudioFormat",
    "WavHeader",
    "encode_wav",
    "read_wav_header",
]
