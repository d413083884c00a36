import struct
from collections.abc import Callable

import pytest

from wavecodec.format import SampleType, encode_wave_bytes

# 4 bytes of 16-bit mono PCM at 44100 Hz
TONE_PAYLOAD = bytes([0x00, 0x01, 0x02, 0x03])


@pytest.fixture
def tone_wav() -> bytes:
    """A canonical 48-byte WAVE file holding TONE_PAYLOAD."""
    return encode_wave_bytes(TONE_PAYLOAD, 1, 44100, SampleType.INT16)


@pytest.fixture
def tone_payload() -> bytes:
    return TONE_PAYLOAD


def _set_riff_size(wav: bytearray) -> None:
    struct.pack_into("<I", wav, 4, len(wav) - 8)


@pytest.fixture
def insert_chunk() -> Callable[[bytes, bytes, bytes], bytes]:
    """Return a helper that inserts a chunk before the data chunk and fixes the RIFF size."""

    def _insert(wav: bytes, chunk_id: bytes, payload: bytes) -> bytes:
        data_offset = wav.index(b"data", 36)
        chunk = chunk_id + struct.pack("<I", len(payload)) + payload
        out = bytearray(wav[:data_offset] + chunk + wav[data_offset:])
        _set_riff_size(out)
        return bytes(out)

    return _insert


@pytest.fixture
def patch_field() -> Callable[[bytes, int, str, int], bytes]:
    """Return a helper that overwrites one packed field at a byte offset."""

    def _patch(wav: bytes, offset: int, fmt: str, value: int) -> bytes:
        out = bytearray(wav)
        struct.pack_into(fmt, out, offset, value)
        return bytes(out)

    return _patch


@pytest.fixture
def append_bytes() -> Callable[[bytes, bytes], bytes]:
    """Return a helper that appends bytes after the payload and fixes the RIFF size."""

    def _append(wav: bytes, extra: bytes) -> bytes:
        out = bytearray(wav + extra)
        _set_riff_size(out)
        return bytes(out)

    return _append
