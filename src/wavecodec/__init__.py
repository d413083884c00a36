"""wavecodec - PCM WAVE container codec.

This package decodes RIFF/WAVE byte streams into in-memory PCM wave objects
and encodes PCM buffers back into conformant WAVE files.

Example Usage
-------------
>>> from wavecodec import SampleType, load_wave, save_wave
>>>
>>> save_wave("out.wav", pcm_bytes, num_channels=2, sample_rate=48000,
...           sample_type=SampleType.INT16)
>>>
>>> with load_wave("out.wav") as wave:
...     print(f"{wave.num_channels} ch, {wave.sample_rate} Hz, {wave.num_frames} frames")
"""

# Re-export format module for convenience
from wavecodec.format import (
    ErrorKind,
    SampleType,
    ValidationResult,
    WaveError,
    WaveFile,
    decode_wave,
    encode_wave,
    load_wave,
    release_wave,
    save_samples,
    save_wave,
    validate_wave,
)

__all__ = [
    # Types
    "SampleType",
    "WaveFile",
    # Reader
    "load_wave",
    "decode_wave",
    "release_wave",
    # Writer
    "save_wave",
    "encode_wave",
    "save_samples",
    # Validation
    "validate_wave",
    "ValidationResult",
    "ErrorKind",
    "WaveError",
]
