from wavecodec.format.riff import MAX_U16, MAX_U32


def validate_channel_count(type_: object, channels: int) -> None:
    """Validate that the channel count fits the 16-bit field."""
    if not 1 <= channels <= MAX_U16:
        raise ValueError(f"Channel count must be between 1 and {MAX_U16}")


def validate_sample_rate(type_: object, sample_rate: int) -> None:
    """Validate that the sample rate fits the 32-bit field."""
    if not 1 <= sample_rate <= MAX_U32:
        raise ValueError(f"Sample rate must be between 1 and {MAX_U32}")
