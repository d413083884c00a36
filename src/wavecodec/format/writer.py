"""WAVE file writer.

This module serializes a raw PCM buffer into a canonical WAVE byte stream:
container header, 16-byte PCM format descriptor and data chunk, in that
order. Only the structural fields are computed; the sample bytes are written
as given.
"""

import io
from pathlib import Path
from typing import BinaryIO

import numpy as np
from numpy.typing import NDArray

from wavecodec.format.riff import (
    CHUNK_HEADER,
    DATA_ID,
    FMT_CHUNK,
    FMT_ID,
    MAX_U16,
    MAX_U32,
    PCM_FMT_CHUNK_SIZE,
    RIFF_HEADER,
    RIFF_ID,
    WAVE_FORMAT_PCM,
    WAVE_ID,
    WaveIOError,
    bits_per_sample,
    block_align,
    byte_rate,
    riff_chunk_size,
)
from wavecodec.format.types import Buffer, DataChunk, FmtChunk, RiffHeader, SampleType


def save_wave(
    path: Path | str,
    data: Buffer,
    num_channels: int,
    sample_rate: int,
    sample_type: SampleType | int = SampleType.INT16,
) -> None:
    """Save a raw PCM buffer as a WAVE file.

    Args:
        path: Output file path. Parent directories are created.
        data: Raw interleaved sample bytes.
        num_channels: Number of audio channels.
        sample_rate: Sample rate in Hz.
        sample_type: Sample representation; selects bits per sample.

    Raises:
        ValueError: If a structural field does not fit its on-disk width.
        WaveIOError: If the file cannot be opened for writing.
    """
    path = Path(path)
    chunks = _build_chunks(data, num_channels, sample_rate, sample_type)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        f = open(path, "wb")
    except OSError as e:
        raise WaveIOError(f"FILE_STREAM: cannot open a file: {path}", field="FILE_STREAM") from e

    with f:
        _write_chunks(f, *chunks)


def encode_wave(
    sink: BinaryIO,
    data: Buffer,
    num_channels: int,
    sample_rate: int,
    sample_type: SampleType | int = SampleType.INT16,
) -> None:
    """Write a WAVE byte stream to an open binary sink.

    The sink is left open. See ``save_wave`` for arguments.
    """
    _write_chunks(sink, *_build_chunks(data, num_channels, sample_rate, sample_type))


def encode_wave_bytes(
    data: Buffer,
    num_channels: int,
    sample_rate: int,
    sample_type: SampleType | int = SampleType.INT16,
) -> bytes:
    """Build a complete WAVE file in memory and return its bytes."""
    buffer = io.BytesIO()
    encode_wave(buffer, data, num_channels, sample_rate, sample_type)
    return buffer.getvalue()


def save_samples(path: Path | str, samples: NDArray[np.generic], sample_rate: int) -> None:
    """Save a numpy sample array as a WAVE file.

    The sample type comes from the array dtype (uint8, int16 or float32) and
    the channel count from its shape: 1D arrays are mono, 2D arrays are
    (num_frames, num_channels).

    Raises:
        ValueError: If the dtype or shape has no WAVE counterpart.
    """
    arr = np.asarray(samples)
    if arr.ndim == 1:
        num_channels = 1
    elif arr.ndim == 2:
        num_channels = arr.shape[1]
    else:
        raise ValueError(f"samples should be 1D or 2D, got shape {arr.shape}")

    sample_type = SampleType.from_dtype(arr.dtype)
    data = np.ascontiguousarray(arr, dtype=sample_type.dtype).tobytes()

    save_wave(path, data, num_channels, sample_rate, sample_type)


def _build_chunks(
    data: Buffer,
    num_channels: int,
    sample_rate: int,
    sample_type: SampleType | int,
) -> tuple[RiffHeader, FmtChunk, DataChunk]:
    if not 1 <= num_channels <= MAX_U16:
        raise ValueError(f"num_channels must be between 1 and {MAX_U16}, got {num_channels}")
    if not 1 <= sample_rate <= MAX_U32:
        raise ValueError(f"sample_rate must be between 1 and {MAX_U32}, got {sample_rate}")

    bits = bits_per_sample(sample_type)
    with memoryview(data) as view:
        if not view.c_contiguous:
            raise ValueError("data must be a C-contiguous buffer")
        data_size = view.nbytes

    data_chunk = DataChunk(subchunk_id=DATA_ID, subchunk_size=data_size, data=data)

    fmt_chunk = FmtChunk(
        subchunk_id=FMT_ID,
        subchunk_size=PCM_FMT_CHUNK_SIZE,
        audio_format=WAVE_FORMAT_PCM,
        num_channels=num_channels,
        sample_rate=sample_rate,
        byte_rate=byte_rate(sample_rate, num_channels, bits),
        block_align=block_align(num_channels, bits),
        bits_per_sample=bits,
    )
    if fmt_chunk.byte_rate > MAX_U32:
        raise ValueError(f"byte rate {fmt_chunk.byte_rate} does not fit in 32 bits")
    if fmt_chunk.block_align > MAX_U16:
        raise ValueError(f"block align {fmt_chunk.block_align} does not fit in 16 bits")

    riff_chunk = RiffHeader(chunk_id=RIFF_ID, chunk_size=riff_chunk_size(data_size), format=WAVE_ID)
    if riff_chunk.chunk_size > MAX_U32:
        raise ValueError(f"data size {data_size} is too large for a RIFF container")

    return riff_chunk, fmt_chunk, data_chunk


def _write_chunks(
    sink: BinaryIO,
    riff_chunk: RiffHeader,
    fmt_chunk: FmtChunk,
    data_chunk: DataChunk,
) -> None:
    sink.write(RIFF_HEADER.pack(riff_chunk.chunk_id, riff_chunk.chunk_size, riff_chunk.format))

    sink.write(
        FMT_CHUNK.pack(
            fmt_chunk.subchunk_id,
            fmt_chunk.subchunk_size,
            fmt_chunk.audio_format,
            fmt_chunk.num_channels,
            fmt_chunk.sample_rate,
            fmt_chunk.byte_rate,
            fmt_chunk.block_align,
            fmt_chunk.bits_per_sample,
        )
    )

    sink.write(CHUNK_HEADER.pack(data_chunk.subchunk_id, data_chunk.subchunk_size))
    sink.write(data_chunk.data)
