"""RIFF/WAVE chunk model.

This module defines the FourCC identifiers, the explicit little-endian binary
layouts of the structural records, the derived-field formulas that relate
them, and the error types raised when a byte stream does not match them.

Binary Layout
-------------
    offset  size  field
    ------  ----  ---------------------------
         0     4  "RIFF"
         4     4  chunk size (file size - 8)
         8     4  "WAVE"
        12     4  "fmt "
        16     4  subchunk size (16 for PCM)
        20     2  audio format (1 = PCM)
        22     2  channel count
        24     4  sample rate
        28     4  byte rate
        32     2  block align
        34     2  bits per sample
        36     4  "data"  (optionally preceded by LIST chunks)
        40     4  data size
        44     n  payload
"""

import struct
from enum import Enum
from typing import BinaryIO

from wavecodec.format.types import SampleType

# FourCC identifiers
RIFF_ID = b"RIFF"
WAVE_ID = b"WAVE"
FMT_ID = b"fmt "
DATA_ID = b"data"
LIST_ID = b"LIST"

# Chunks that may sit between the format descriptor and the data chunk
SKIPPABLE_CHUNK_IDS = frozenset({LIST_ID})

# Offsets
RIFF_CHUNK_OFFSET = 4
NORMAL_CHUNK_OFFSET = 8

# Audio format codes
WAVE_FORMAT_PCM = 1

# PCM specific
PCM_FMT_CHUNK_SIZE = 16

# Explicit layouts; "<" disables native alignment so no padding is inserted
RIFF_HEADER = struct.Struct("<4sI4s")
FMT_CHUNK = struct.Struct("<4sIHHIIHH")
CHUNK_HEADER = struct.Struct("<4sI")

MAX_U16 = 0xFFFF
MAX_U32 = 0xFFFFFFFF


class ErrorKind(str, Enum):
    """Classification of decode and encode failures."""

    IO = "io"
    CHUNK_ID = "chunk_id"
    CHUNK_SIZE = "chunk_size"
    DERIVED_FIELD = "derived_field"
    BOUND = "bound"
    UNSUPPORTED_FORMAT = "unsupported_format"
    ALLOCATION = "allocation"


class WaveError(Exception):
    """Error reading or writing WAVE files.

    Attributes:
        kind: Which family of failure this is.
        field: Name of the offending field (e.g. ``"BYTE_RATE"``), if any.
        got: The value observed in the stream.
        expected: The value (or bound) the field was checked against.
    """

    kind: ErrorKind = ErrorKind.IO

    def __init__(
        self,
        message: str,
        field: str | None = None,
        got: object = None,
        expected: object = None,
    ) -> None:
        self.field = field
        self.got = got
        self.expected = expected
        super().__init__(message)


class WaveIOError(WaveError):
    """The source or sink could not be opened."""

    kind = ErrorKind.IO


class TruncatedFileError(WaveIOError):
    """The stream ended before a complete record could be read."""

    def __init__(self, field: str, got: int, expected: int) -> None:
        super().__init__(
            f"{field}: unexpected end of file, got {got} bytes, expected {expected}",
            field=field,
            got=got,
            expected=expected,
        )


class ChunkIdError(WaveError):
    """A tag field does not equal its expected FourCC."""

    kind = ErrorKind.CHUNK_ID

    def __init__(self, field: str, got: bytes, expected: bytes) -> None:
        super().__init__(
            f"{field}: got {format_fourcc(got)}, expected {format_fourcc(expected)}",
            field=field,
            got=got,
            expected=expected,
        )


class ChunkSizeError(WaveError):
    """The container size field disagrees with the actual stream length."""

    kind = ErrorKind.CHUNK_SIZE

    def __init__(self, field: str, got: int, expected: int) -> None:
        super().__init__(
            f"{field}: chunk size is not equal to calculated chunk size, "
            f"got {got} (0x{got:08x}), expected {expected} (0x{expected:08x})",
            field=field,
            got=got,
            expected=expected,
        )


class DerivedFieldError(WaveError):
    """A stored derived field disagrees with its recomputed value."""

    kind = ErrorKind.DERIVED_FIELD

    def __init__(self, field: str, got: int, expected: int) -> None:
        label = field.replace("_", " ").lower()
        super().__init__(
            f"{field}: {label} is not equal to calculated {label}, "
            f"got {got}, expected {expected}",
            field=field,
            got=got,
            expected=expected,
        )


class DataBoundError(WaveError):
    """The declared data size exceeds the space implied by the container."""

    kind = ErrorKind.BOUND

    def __init__(self, field: str, got: int, expected: int) -> None:
        super().__init__(
            f"{field}: declared size exceeds the container, "
            f"got {got} (0x{got:08x}), expected at most {expected} (0x{expected:08x})",
            field=field,
            got=got,
            expected=expected,
        )


class UnsupportedFormatError(WaveError):
    """The format descriptor describes something other than plain PCM."""

    kind = ErrorKind.UNSUPPORTED_FORMAT


class AllocationError(WaveError):
    """The payload buffer could not be allocated."""

    kind = ErrorKind.ALLOCATION


def fourcc_to_be(tag: bytes) -> int:
    """Return the big-endian integer reading of a FourCC (``b"RIFF"`` -> 0x52494646)."""
    return int.from_bytes(tag[:4].ljust(4, b"\x00"), "big")


def format_fourcc(tag: bytes) -> str:
    """Render a FourCC for diagnostics, e.g. ``0x52494646 'RIFF'``."""
    text = tag.decode("ascii", errors="backslashreplace")
    return f"0x{fourcc_to_be(tag):08x} '{text}'"


def byte_rate(sample_rate: int, num_channels: int, bits_per_sample: int) -> int:
    """Bytes per second of audio: ``sample_rate * num_channels * (bits_per_sample // 8)``."""
    return sample_rate * num_channels * (bits_per_sample // 8)


def block_align(num_channels: int, bits_per_sample: int) -> int:
    """Bytes per multi-channel sample frame: ``num_channels * (bits_per_sample // 8)``."""
    return num_channels * (bits_per_sample // 8)


def bits_per_sample(sample_type: SampleType | int) -> int:
    """Bit width of a sample representation.

    Unrecognized values fall back to 8 bits rather than raising.
    """
    return SampleType.from_value(sample_type).bits


def riff_chunk_size(data_size: int) -> int:
    """Container size field for a canonical PCM file with ``data_size`` payload bytes."""
    return (
        RIFF_CHUNK_OFFSET
        + (NORMAL_CHUNK_OFFSET + PCM_FMT_CHUNK_SIZE)
        + (NORMAL_CHUNK_OFFSET + data_size)
    )


def read_exact(f: BinaryIO, size: int, field: str) -> bytes:
    """Read exactly ``size`` bytes or raise.

    Args:
        f: Binary stream to read from.
        size: Number of bytes required.
        field: Name of the record being read, used in the error.

    Raises:
        TruncatedFileError: If the stream ends early.
    """
    data = f.read(size)
    if len(data) < size:
        raise TruncatedFileError(field, len(data), size)
    return data

