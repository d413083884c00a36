"""Unit tests for the non-raising validation report."""

import struct
from collections.abc import Callable
from pathlib import Path

from wavecodec.format import (
    ErrorKind,
    SampleType,
    ValidationResult,
    collect_warnings,
    decode_wave_bytes,
    encode_wave_bytes,
    validate_wave,
)


def _write(tmp_path: Path, wav: bytes, name: str = "test.wav") -> Path:
    path = tmp_path / name
    path.write_bytes(wav)
    return path


class TestValidateWave:
    def test_canonical_file(self, tmp_path: Path, tone_wav: bytes) -> None:
        result = validate_wave(_write(tmp_path, tone_wav))

        assert result.valid
        assert result.errors == []
        assert result.warnings == []
        assert result.error_kind is None

    def test_warnings_do_not_fail(
        self,
        tmp_path: Path,
        tone_wav: bytes,
        insert_chunk: Callable[[bytes, bytes, bytes], bytes],
    ) -> None:
        result = validate_wave(_write(tmp_path, insert_chunk(tone_wav, b"LIST", b"abcd")))

        assert result.valid
        assert result.warnings == ["Skipped LIST chunk of 4 bytes"]

    def test_strict_mode(
        self,
        tmp_path: Path,
        tone_wav: bytes,
        append_bytes: Callable[[bytes, bytes], bytes],
    ) -> None:
        path = _write(tmp_path, append_bytes(tone_wav, b"\x00\x00"))

        result = validate_wave(path, strict=True)

        assert not result.valid
        assert result.errors == ["Strict mode: 2 bytes follow the data payload"]
        assert result.warnings == ["2 bytes follow the data payload"]

    def test_structural_failure(
        self,
        tmp_path: Path,
        tone_wav: bytes,
        patch_field: Callable[[bytes, int, str, int], bytes],
    ) -> None:
        path = _write(tmp_path, patch_field(tone_wav, 28, "<I", 88201))

        result = validate_wave(path)

        assert not result.valid
        assert result.error_kind == ErrorKind.DERIVED_FIELD
        assert len(result.errors) == 1
        assert result.errors[0].startswith("BYTE_RATE:")

    def test_missing_file(self, tmp_path: Path) -> None:
        result = validate_wave(tmp_path / "missing.wav")

        assert not result.valid
        assert result.error_kind == ErrorKind.IO


class TestCollectWarnings:
    def test_extended_descriptor(self, tone_wav: bytes) -> None:
        wav = bytearray(tone_wav[:36] + b"\x00\x00" + tone_wav[36:])
        struct.pack_into("<I", wav, 16, 18)
        struct.pack_into("<I", wav, 4, len(wav) - 8)

        warnings = collect_warnings(decode_wave_bytes(bytes(wav)))

        assert len(warnings) == 1
        assert "fmt subchunk size is 18" in warnings[0]

    def test_partial_frame(self, tone_wav: bytes) -> None:
        wave = decode_wave_bytes(tone_wav[:40] + struct.pack("<I", 3) + tone_wav[44:])

        warnings = collect_warnings(wave)

        assert "data size 3 is not a multiple of block align 2" in warnings
        assert "1 bytes follow the data payload" in warnings

    def test_canonical_8_bit(self) -> None:
        wave = decode_wave_bytes(encode_wave_bytes(b"\x80" * 3, 1, 8000, SampleType.UINT8))
        assert collect_warnings(wave) == []


class TestValidationResult:
    def test_to_dict(self) -> None:
        result = ValidationResult.failure(["bad"], ["meh"], error_kind=ErrorKind.BOUND)

        assert result.to_dict() == {
            "valid": False,
            "errors": ["bad"],
            "warnings": ["meh"],
            "error_kind": "bound",
        }

    def test_success_to_dict(self) -> None:
        assert ValidationResult.success().to_dict()["error_kind"] is None
