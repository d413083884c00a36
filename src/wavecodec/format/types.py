"""Python types for the WAVE chunk model.

These types describe the three structural records of a PCM WAVE file and the
decoded wave object that owns the sample payload.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from types import TracebackType
from typing import TypeAlias

import numpy as np
from numpy.typing import DTypeLike, NDArray

Buffer: TypeAlias = bytes | bytearray | memoryview


class SampleType(IntEnum):
    """Sample representation of a PCM payload.

    Readers should handle unknown values by treating them as UINT8.
    """

    UINT8 = 0
    """8-bit unsigned integer samples."""

    INT16 = 1
    """16-bit signed little-endian integer samples."""

    FLOAT32 = 2
    """32-bit little-endian floating point samples."""

    @classmethod
    def from_value(cls, value: int) -> "SampleType":
        """Convert from an integer selector, treating unknown values as UINT8."""
        try:
            return cls(value)
        except ValueError:
            return cls.UINT8

    @classmethod
    def from_bits(cls, bits: int) -> "SampleType | None":
        """Find the sample type with the given bit width, if any."""
        for sample_type in cls:
            if sample_type.bits == bits:
                return sample_type
        return None

    @classmethod
    def from_dtype(cls, dtype: DTypeLike) -> "SampleType":
        """Find the sample type matching a numpy dtype.

        Raises:
            ValueError: If the dtype has no PCM counterpart.
        """
        dtype = np.dtype(dtype)
        for sample_type in cls:
            if np.dtype(sample_type.dtype) == dtype.newbyteorder("<"):
                return sample_type
        raise ValueError(f"No sample type for dtype {dtype}")

    @property
    def bits(self) -> int:
        """Bit width of one sample."""
        widths = {
            self.UINT8: 8,
            self.INT16: 16,
            self.FLOAT32: 32,
        }
        return widths[self]

    @property
    def dtype(self) -> str:
        """Little-endian numpy dtype string for one sample."""
        dtypes = {
            self.UINT8: "u1",
            self.INT16: "<i2",
            self.FLOAT32: "<f4",
        }
        return dtypes[self]

    @property
    def display_name(self) -> str:
        """Human-readable name for this sample type."""
        names = {
            self.UINT8: "8-bit unsigned integer",
            self.INT16: "16-bit signed integer",
            self.FLOAT32: "32-bit float",
        }
        return names[self]


@dataclass
class RiffHeader:
    """The 12-byte container header."""

    chunk_id: bytes
    chunk_size: int
    format: bytes


@dataclass
class FmtChunk:
    """The 24-byte PCM format descriptor."""

    subchunk_id: bytes
    subchunk_size: int
    audio_format: int
    num_channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int


@dataclass
class DataChunk:
    """The data subchunk and its raw sample payload."""

    subchunk_id: bytes
    subchunk_size: int
    data: Buffer


@dataclass
class WaveFile:
    """A decoded WAVE file.

    The wave file is the only owner of its payload buffer. Call ``release()``
    (or use it as a context manager) to drop the payload once done.
    """

    riff_chunk: RiffHeader
    fmt_chunk: FmtChunk
    data_chunk: DataChunk
    loaded: bool = True
    """Whether the payload is still held."""

    skipped_chunks: list[tuple[bytes, int]] = field(default_factory=list)
    """(chunk_id, chunk_size) of every chunk skipped before the data chunk."""

    trailing_bytes: int = 0
    """Bytes in the container after the declared payload."""

    @property
    def num_channels(self) -> int:
        return self.fmt_chunk.num_channels

    @property
    def sample_rate(self) -> int:
        return self.fmt_chunk.sample_rate

    @property
    def bits_per_sample(self) -> int:
        return self.fmt_chunk.bits_per_sample

    @property
    def sample_type(self) -> SampleType | None:
        """The sample type matching the stored bit depth, if any."""
        return SampleType.from_bits(self.fmt_chunk.bits_per_sample)

    @property
    def data(self) -> Buffer:
        """The raw payload bytes."""
        return self.data_chunk.data

    @property
    def num_frames(self) -> int:
        """Number of complete multi-channel sample frames in the payload."""
        if self.fmt_chunk.block_align == 0:
            return 0
        return len(self.data_chunk.data) // self.fmt_chunk.block_align

    @property
    def duration_seconds(self) -> float:
        if self.fmt_chunk.sample_rate == 0:
            return 0.0
        return self.num_frames / self.fmt_chunk.sample_rate

    def samples(self) -> NDArray[np.generic]:
        """View the payload as a read-only array of shape (num_frames, num_channels).

        Trailing bytes that do not fill a whole frame are ignored.

        Raises:
            ValueError: If the payload was released or the bit depth has no
                numpy counterpart.
        """
        if not self.loaded:
            raise ValueError("Wave payload has been released")

        sample_type = self.sample_type
        if sample_type is None:
            raise ValueError(f"No sample type for {self.bits_per_sample}-bit samples")

        count = self.num_frames * self.num_channels
        if count == 0:
            view = np.zeros((0, self.num_channels), dtype=sample_type.dtype)
            view.flags.writeable = False
            return view
        view = np.frombuffer(self.data_chunk.data, dtype=sample_type.dtype, count=count)
        view = view.reshape(self.num_frames, self.num_channels)
        view.flags.writeable = False
        return view

    def release(self) -> None:
        """Drop the payload buffer. Safe to call more than once."""
        if self.loaded:
            self.data_chunk.data = bytearray()
            self.loaded = False

    def __enter__(self) -> "WaveFile":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.release()
