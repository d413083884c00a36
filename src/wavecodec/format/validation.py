"""Validation report for WAVE files.

The reader raises on the first structural failure. This module wraps it in a
non-raising report that also collects warnings about files that decode but
are not in canonical form.
"""

from dataclasses import dataclass
from pathlib import Path

from wavecodec.format.reader import load_wave
from wavecodec.format.riff import PCM_FMT_CHUNK_SIZE, ErrorKind, WaveError
from wavecodec.format.types import WaveFile


@dataclass
class ValidationResult:
    """Result of validation with optional warnings."""

    valid: bool
    errors: list[str]
    warnings: list[str]
    error_kind: ErrorKind | None = None
    """Kind of the fatal error, when decoding failed."""

    @classmethod
    def success(cls, warnings: list[str] | None = None) -> "ValidationResult":
        """Create a successful validation result."""
        return cls(valid=True, errors=[], warnings=warnings or [])

    @classmethod
    def failure(
        cls,
        errors: list[str],
        warnings: list[str] | None = None,
        error_kind: ErrorKind | None = None,
    ) -> "ValidationResult":
        """Create a failed validation result."""
        return cls(valid=False, errors=errors, warnings=warnings or [], error_kind=error_kind)

    def to_dict(self) -> dict[str, object]:
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "error_kind": self.error_kind.value if self.error_kind else None,
        }


def collect_warnings(wave: WaveFile) -> list[str]:
    """List the ways a decoded wave departs from the canonical layout.

    Checks:
    - extended format descriptor (subchunk size > 16)
    - skipped LIST chunks
    - bytes after the declared payload
    - payload length not a multiple of block_align
    - bit depth with no sample type (anything but 8, 16, 32)
    """
    warnings: list[str] = []
    fmt_chunk = wave.fmt_chunk

    if fmt_chunk.subchunk_size != PCM_FMT_CHUNK_SIZE:
        warnings.append(
            f"fmt subchunk size is {fmt_chunk.subchunk_size}, "
            f"extension bytes beyond {PCM_FMT_CHUNK_SIZE} were skipped"
        )

    for chunk_id, chunk_size in wave.skipped_chunks:
        warnings.append(f"Skipped {chunk_id.decode('ascii')} chunk of {chunk_size} bytes")

    if wave.trailing_bytes:
        warnings.append(f"{wave.trailing_bytes} bytes follow the data payload")

    if fmt_chunk.block_align and wave.data_chunk.subchunk_size % fmt_chunk.block_align:
        warnings.append(
            f"data size {wave.data_chunk.subchunk_size} is not a multiple of "
            f"block align {fmt_chunk.block_align}"
        )

    if wave.sample_type is None:
        warnings.append(f"bits_per_sample {fmt_chunk.bits_per_sample} has no sample type")

    return warnings


def validate_wave(path: Path | str, *, strict: bool = False) -> ValidationResult:
    """Validate a WAVE file without raising on format errors.

    Args:
        path: Path to the WAV file.
        strict: Treat warnings as errors.

    Returns:
        ValidationResult with errors and warnings.
    """
    try:
        wave = load_wave(path)
    except WaveError as e:
        return ValidationResult.failure([str(e)], error_kind=e.kind)

    with wave:
        warnings = collect_warnings(wave)

    if strict and warnings:
        return ValidationResult.failure([f"Strict mode: {w}" for w in warnings], warnings)
    return ValidationResult.success(warnings)
