"""WAVE file reader.

This module decodes a PCM WAVE byte stream into a fully loaded WaveFile,
validating every structural field against the chunk model on the way.
A stream that fails any check raises a WaveError subclass; no partially
validated WaveFile is ever returned.
"""

import io
import struct
from pathlib import Path
from typing import BinaryIO

from wavecodec.format.riff import (
    DATA_ID,
    FMT_CHUNK,
    FMT_ID,
    NORMAL_CHUNK_OFFSET,
    PCM_FMT_CHUNK_SIZE,
    RIFF_HEADER,
    RIFF_ID,
    SKIPPABLE_CHUNK_IDS,
    WAVE_FORMAT_PCM,
    WAVE_ID,
    AllocationError,
    ChunkIdError,
    ChunkSizeError,
    DataBoundError,
    DerivedFieldError,
    TruncatedFileError,
    UnsupportedFormatError,
    WaveIOError,
    block_align,
    byte_rate,
    read_exact,
)
from wavecodec.format.types import DataChunk, FmtChunk, RiffHeader, WaveFile

_U32 = struct.Struct("<I")


def load_wave(path: Path | str) -> WaveFile:
    """Load a PCM WAVE file.

    Args:
        path: Path to the WAV file.

    Returns:
        A loaded WaveFile that owns the payload buffer.

    Raises:
        WaveIOError: If the file cannot be opened or is truncated.
        WaveError: If any structural check fails (see ``decode_wave``).
    """
    path = Path(path)

    try:
        f = open(path, "rb")
    except FileNotFoundError as e:
        raise WaveIOError(f"FILE_STREAM: file not found: {path}", field="FILE_STREAM") from e
    except OSError as e:
        raise WaveIOError(f"FILE_STREAM: cannot open a file: {path}", field="FILE_STREAM") from e

    with f:
        return decode_wave(f)


def decode_wave_bytes(data: bytes) -> WaveFile:
    """Decode a complete in-memory WAVE file."""
    return decode_wave(io.BytesIO(data), len(data))


def decode_wave(source: BinaryIO, total_length: int | None = None) -> WaveFile:
    """Decode a PCM WAVE stream.

    The stream is read in a single pass: container header, format descriptor,
    any number of skippable (LIST) chunks, then the data chunk.

    Args:
        source: Seekable binary stream positioned at the start of the file.
        total_length: Length of the file in bytes. Measured from the stream
            when omitted.

    Returns:
        A loaded WaveFile.

    Raises:
        ChunkIdError: If a FourCC tag does not match.
        ChunkSizeError: If the RIFF size disagrees with the stream length.
        UnsupportedFormatError: If the audio format is not PCM or the format
            descriptor is shorter than 16 bytes.
        DerivedFieldError: If byte rate or block align disagree with the
            values recomputed from the other fields.
        DataBoundError: If the data size exceeds what the container can hold.
        AllocationError: If the payload buffer cannot be allocated.
        TruncatedFileError: If the stream ends early.
    """
    start = source.tell()
    if total_length is None:
        total_length = source.seek(0, io.SEEK_END) - start
        source.seek(start)
    end = start + total_length

    calculated_chunk_size = total_length - NORMAL_CHUNK_OFFSET

    riff_bytes = read_exact(source, RIFF_HEADER.size, "RIFF_CHUNK")
    riff_chunk = RiffHeader(*RIFF_HEADER.unpack(riff_bytes))
    _check_riff_chunk(riff_chunk, calculated_chunk_size)

    fmt_bytes = read_exact(source, FMT_CHUNK.size, "FMT_SUBCHUNK")
    fmt_chunk = FmtChunk(*FMT_CHUNK.unpack(fmt_bytes))
    _check_fmt_chunk(fmt_chunk)

    # Extended descriptors (e.g. cbSize) carry bytes past the PCM body
    extension_size = fmt_chunk.subchunk_size - PCM_FMT_CHUNK_SIZE
    if extension_size:
        _skip(source, extension_size, end, "FMT_SUBCHUNK_EXTENSION")
        calculated_chunk_size -= extension_size

    skipped_chunks: list[tuple[bytes, int]] = []
    chunk_id = read_exact(source, 4, "DATA_SUBCHUNK_ID")
    while chunk_id in SKIPPABLE_CHUNK_IDS:
        field = chunk_id.decode("ascii").strip().upper()
        (chunk_size,) = _U32.unpack(read_exact(source, _U32.size, f"{field}_SUBCHUNK_SIZE"))
        calculated_chunk_size -= chunk_size + NORMAL_CHUNK_OFFSET
        _skip(source, chunk_size, end, f"{field}_SUBCHUNK")
        skipped_chunks.append((chunk_id, chunk_size))
        chunk_id = read_exact(source, 4, "DATA_SUBCHUNK_ID")

    if chunk_id != DATA_ID:
        raise ChunkIdError("DATA_SUBCHUNK_ID", chunk_id, DATA_ID)

    (data_size,) = _U32.unpack(read_exact(source, _U32.size, "DATA_SUBCHUNK_SIZE"))

    calculated_data_size = calculated_chunk_size - FMT_CHUNK.size - RIFF_HEADER.size
    if data_size > calculated_data_size:
        raise DataBoundError("DATA_SUBCHUNK_SIZE", data_size, calculated_data_size)

    payload = _read_payload(source, data_size)

    return WaveFile(
        riff_chunk=riff_chunk,
        fmt_chunk=fmt_chunk,
        data_chunk=DataChunk(subchunk_id=chunk_id, subchunk_size=data_size, data=payload),
        loaded=True,
        skipped_chunks=skipped_chunks,
        trailing_bytes=calculated_data_size - data_size,
    )


def _check_riff_chunk(riff_chunk: RiffHeader, calculated_chunk_size: int) -> None:
    if riff_chunk.chunk_id != RIFF_ID:
        raise ChunkIdError("RIFF_CHUNK_ID", riff_chunk.chunk_id, RIFF_ID)

    if riff_chunk.chunk_size != calculated_chunk_size:
        raise ChunkSizeError("RIFF_CHUNK_SIZE", riff_chunk.chunk_size, calculated_chunk_size)

    if riff_chunk.format != WAVE_ID:
        raise ChunkIdError("WAVE_CHUNK_ID", riff_chunk.format, WAVE_ID)


def _check_fmt_chunk(fmt_chunk: FmtChunk) -> None:
    if fmt_chunk.subchunk_id != FMT_ID:
        raise ChunkIdError("FMT_SUBCHUNK_ID", fmt_chunk.subchunk_id, FMT_ID)

    if fmt_chunk.subchunk_size < PCM_FMT_CHUNK_SIZE:
        raise UnsupportedFormatError(
            f"FMT_SUBCHUNK_SIZE: format descriptor too small, "
            f"got {fmt_chunk.subchunk_size}, expected at least {PCM_FMT_CHUNK_SIZE}",
            field="FMT_SUBCHUNK_SIZE",
            got=fmt_chunk.subchunk_size,
            expected=PCM_FMT_CHUNK_SIZE,
        )

    if fmt_chunk.audio_format != WAVE_FORMAT_PCM:
        raise UnsupportedFormatError(
            f"AUDIO_FORMAT: unsupported audio format {fmt_chunk.audio_format}, "
            f"supported audio formats: PCM ({WAVE_FORMAT_PCM})",
            field="AUDIO_FORMAT",
            got=fmt_chunk.audio_format,
            expected=WAVE_FORMAT_PCM,
        )

    calculated_byte_rate = byte_rate(
        fmt_chunk.sample_rate, fmt_chunk.num_channels, fmt_chunk.bits_per_sample
    )
    if fmt_chunk.byte_rate != calculated_byte_rate:
        raise DerivedFieldError("BYTE_RATE", fmt_chunk.byte_rate, calculated_byte_rate)

    calculated_block_align = block_align(fmt_chunk.num_channels, fmt_chunk.bits_per_sample)
    if fmt_chunk.block_align != calculated_block_align:
        raise DerivedFieldError("BLOCK_ALIGN", fmt_chunk.block_align, calculated_block_align)


def _skip(source: BinaryIO, size: int, end: int, field: str) -> None:
    """Seek past ``size`` bytes without reading them."""
    remaining = end - source.tell()
    if size > remaining:
        raise TruncatedFileError(field, max(remaining, 0), size)
    source.seek(size, io.SEEK_CUR)


def _read_payload(source: BinaryIO, size: int) -> bytearray:
    """Allocate a buffer of exactly ``size`` bytes and fill it from the stream."""
    try:
        payload = bytearray(size)
    except MemoryError as e:
        raise AllocationError(
            f"MALLOC: failed to allocate memory of size: {size}",
            field="MALLOC",
            got=size,
        ) from e

    filled = 0
    with memoryview(payload) as view:
        while filled < size:
            count = source.readinto(view[filled:])
            if not count:
                raise TruncatedFileError("DATA_SUBCHUNK", filled, size)
            filled += count

    return payload


def release_wave(wave: WaveFile) -> None:
    """Free the payload of a decoded wave. A no-op once already released."""
    wave.release()
