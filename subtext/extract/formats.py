"""
subtext.extract.formats - Audio format triples.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# FFmpeg name for packed (interleaved) 32-bit float samples.
TARGET_SAMPLE_FORMAT = "flt"
TARGET_LAYOUT = "mono"


@dataclass(frozen=True)
class AudioFormat:
    """Sample format, channel layout and sample rate of an audio stream."""

    sample_format: str
    layout: str
    sample_rate: int

    def __str__(self) -> str:
        return f"{self.sample_format}/{self.layout}/{self.sample_rate}Hz"

    @classmethod
    def of(cls, frame: Any) -> AudioFormat:
        """Read the format triple of a decoded frame."""
        return cls(frame.format.name, frame.layout.name, frame.sample_rate)

    @classmethod
    def target(cls, sample_rate: int) -> AudioFormat:
        """Packed float32 mono at ``sample_rate``."""
        return cls(TARGET_SAMPLE_FORMAT, TARGET_LAYOUT, sample_rate)


def channel_count(frame: Any) -> int:
    """Number of channels in a frame's layout."""
    return len(frame.layout.channels)
