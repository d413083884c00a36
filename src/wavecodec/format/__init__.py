"""WAVE container format module.

This module provides functionality for decoding and encoding PCM audio in
the RIFF/WAVE container format.

Format Overview
---------------
    +----------------------------------------+
    | RIFF Header ("WAVE")                   |
    +----------------------------------------+
    | fmt  chunk (PCM format descriptor)     |
    |   - channels, sample rate              |
    |   - byte rate, block align (derived)   |
    |   - bits per sample                    |
    +----------------------------------------+
    | LIST chunk(s) (optional, skipped)      |
    +----------------------------------------+
    | data chunk (raw interleaved samples)   |
    +----------------------------------------+

Example Usage
-------------
>>> from wavecodec.format import SampleType, load_wave, save_wave
>>> save_wave("tone.wav", b"\\x00\\x01\\x02\\x03", 1, 44100, SampleType.INT16)
>>> with load_wave("tone.wav") as wave:
...     print(wave.fmt_chunk.byte_rate, bytes(wave.data))
88200 b'\\x00\\x01\\x02\\x03'
"""

from wavecodec.format.reader import decode_wave, decode_wave_bytes, load_wave, release_wave
from wavecodec.format.riff import (
    AllocationError,
    ChunkIdError,
    ChunkSizeError,
    DataBoundError,
    DerivedFieldError,
    ErrorKind,
    TruncatedFileError,
    UnsupportedFormatError,
    WaveError,
    WaveIOError,
    bits_per_sample,
    block_align,
    byte_rate,
)
from wavecodec.format.types import DataChunk, FmtChunk, RiffHeader, SampleType, WaveFile
from wavecodec.format.validation import ValidationResult, collect_warnings, validate_wave
from wavecodec.format.writer import encode_wave, encode_wave_bytes, save_samples, save_wave

__all__ = [
    # Types
    "SampleType",
    "RiffHeader",
    "FmtChunk",
    "DataChunk",
    "WaveFile",
    # Chunk model
    "byte_rate",
    "block_align",
    "bits_per_sample",
    # Reader
    "load_wave",
    "decode_wave",
    "decode_wave_bytes",
    "release_wave",
    # Writer
    "save_wave",
    "encode_wave",
    "encode_wave_bytes",
    "save_samples",
    # Validation
    "validate_wave",
    "collect_warnings",
    "ValidationResult",
    # Errors
    "ErrorKind",
    "WaveError",
    "WaveIOError",
    "TruncatedFileError",
    "ChunkIdError",
    "ChunkSizeError",
    "DerivedFieldError",
    "DataBoundError",
    "UnsupportedFormatError",
    "AllocationError",
]
