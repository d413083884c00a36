import json
import sys
from pathlib import Path
from typing import Annotated, Literal

from cyclopts import App, Parameter
from rich.console import Console
from rich.table import Table

from wavecodec.cli.validators import validate_channel_count, validate_sample_rate
from wavecodec.format import (
    SampleType,
    WaveError,
    WaveFile,
    load_wave,
    save_wave,
    validate_wave,
)
from wavecodec.format.riff import format_fourcc

SampleTypeName = Literal["uint8", "int16", "float32"]

SAMPLE_TYPES: dict[str, SampleType] = {
    "uint8": SampleType.UINT8,
    "int16": SampleType.INT16,
    "float32": SampleType.FLOAT32,
}

app = App(name="wavecodec", help="Decode, encode and validate PCM WAVE files")
console = Console()
err_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print an error message in red on stderr."""
    err_console.print(message, style="bold red", soft_wrap=True, markup=False)


def print_success(message: str) -> None:
    """Print a success message in green."""
    console.print(message, style="bold green", soft_wrap=True, markup=False)


def print_warning(message: str) -> None:
    """Print a warning message in yellow."""
    console.print(message, style="bold yellow", soft_wrap=True, markup=False)


def _chunk_table(wave: WaveFile) -> Table:
    riff, fmt, data = wave.riff_chunk, wave.fmt_chunk, wave.data_chunk

    table = Table(show_header=True, header_style="bold")
    table.add_column("Chunk", justify="left")
    table.add_column("Field", justify="left")
    table.add_column("Value", justify="right")

    table.add_row("RIFF", "chunk_id", format_fourcc(riff.chunk_id))
    table.add_row("", "chunk_size", str(riff.chunk_size))
    table.add_row("", "format", format_fourcc(riff.format))
    table.add_row("fmt", "subchunk_size", str(fmt.subchunk_size))
    table.add_row("", "audio_format", str(fmt.audio_format))
    table.add_row("", "num_channels", str(fmt.num_channels))
    table.add_row("", "sample_rate", str(fmt.sample_rate))
    table.add_row("", "byte_rate", str(fmt.byte_rate))
    table.add_row("", "block_align", str(fmt.block_align))
    table.add_row("", "bits_per_sample", str(fmt.bits_per_sample))
    for chunk_id, chunk_size in wave.skipped_chunks:
        table.add_row(chunk_id.decode("ascii"), "subchunk_size (skipped)", str(chunk_size))
    table.add_row("data", "subchunk_size", str(data.subchunk_size))
    return table


@app.command
def info(file: Path) -> int:
    """
    Display the chunk fields of a WAVE file.

    Parameters
    ----------
    file: Path
        The path to the .wav file
    """
    try:
        wave = load_wave(file)
    except WaveError as e:
        print_error(f"[FAIL] {e}")
        return 1

    with wave:
        sample_type = wave.sample_type
        console.print(f"Wave: {file}", soft_wrap=True, markup=False)
        console.print(_chunk_table(wave))
        console.print(
            f"  Sample type: {sample_type.display_name if sample_type else 'unknown'}"
        )
        console.print(f"  Frames: {wave.num_frames}")
        console.print(f"  Duration: {wave.duration_seconds:.3f} s")
        if wave.trailing_bytes:
            console.print(f"  Trailing bytes: {wave.trailing_bytes}")

    return 0


@app.command
def validate(
    file: Path,
    strict: bool = False,
    output_json: Annotated[bool, Parameter(name=["--json"])] = False,
) -> int:
    """
    Validate a WAVE file.

    Checks RIFF structure, the PCM format descriptor and its derived fields,
    and the data chunk bounds.

    Parameters
    ----------
    file: Path
        The path to the .wav file to validate
    strict: bool
        Treat warnings as errors (default: False)
    output_json: bool
        Output results as JSON (default: False)
    """
    result = validate_wave(file, strict=strict)

    if output_json:
        results = {"file": str(file), **result.to_dict()}
        console.print(json.dumps(results, indent=2), soft_wrap=True, markup=False, highlight=False)
        return 0 if result.valid else 1

    if result.valid:
        print_success(f"[PASS] {file}")
        for warning in result.warnings:
            print_warning(f"  [WARN] {warning}")
    else:
        print_error(f"[FAIL] {file}")
        for error in result.errors:
            print_error(f"  {error}")

    return 0 if result.valid else 1


@app.command
def encode(
    source: Path,
    output: Path,
    channels: Annotated[int, Parameter(validator=validate_channel_count)] = 1,
    sample_rate: Annotated[int, Parameter(validator=validate_sample_rate)] = 44100,
    sample_type: SampleTypeName = "int16",
) -> int:
    """
    Wrap a raw interleaved PCM file in a WAVE container.

    Parameters
    ----------
    source: Path
        The raw PCM sample file
    output: Path
        The output destination for the .wav file
    channels: int
        Number of interleaved channels (default: 1)
    sample_rate: int
        Sample rate in Hz (default: 44100)
    sample_type: SampleTypeName
        Sample representation: uint8, int16 or float32 (default: int16)
    """
    try:
        data = source.read_bytes()
    except OSError as e:
        print_error(f"Error: cannot read source file {source}: {e}")
        return 1

    try:
        save_wave(output, data, channels, sample_rate, SAMPLE_TYPES[sample_type])
    except (WaveError, ValueError) as e:
        print_error(f"Error: {e}")
        return 1

    print_success(f"Encoded {len(data)} bytes -> {output}")
    return 0


@app.command
def extract(file: Path, output: Path) -> int:
    """
    Write the raw data payload of a WAVE file.

    Parameters
    ----------
    file: Path
        The path to the .wav file
    output: Path
        The output destination for the raw samples
    """
    try:
        wave = load_wave(file)
    except WaveError as e:
        print_error(f"[FAIL] {e}")
        return 1

    with wave:
        size = wave.data_chunk.subchunk_size
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_bytes(wave.data)
        except OSError as e:
            print_error(f"Error: cannot write output file {output}: {e}")
            return 1

    print_success(f"Extracted {size} bytes -> {output}")
    return 0


def main() -> None:
    sys.exit(app())


if __name__ == "__main__":
    main()
