"""
subtext.extract.pcm - PCM sample extraction and the output buffer.

Frame planes are allocated with alignment padding, so the plane buffer is
usually larger than the samples it holds. Only the span covered by
``samples * channels * sample_width`` is ever decoded.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from subtext.exceptions import CodecError
from subtext.extract.formats import channel_count

SAMPLE_WIDTH = np.dtype(np.float32).itemsize


def valid_byte_span(samples: int, channels: int, sample_width: int = SAMPLE_WIDTH) -> int:
    """Number of bytes holding real samples in a packed buffer."""
    return samples * channels * sample_width


def extract_samples(
    buffer: Any,
    samples: int,
    channels: int,
    sample_width: int = SAMPLE_WIDTH,
) -> np.ndarray:
    """Decode the valid region of a packed float32 buffer.

    Args:
        buffer: Any object supporting the buffer protocol
        samples: Samples per channel in the buffer
        channels: Interleaved channel count
        sample_width: Bytes per sample

    Returns:
        Copy of the interleaved samples as a 1-D float32 array

    Raises:
        CodecError: If the buffer is smaller than the valid span
    """
    if sample_width != SAMPLE_WIDTH:
        raise CodecError(f"Expected {SAMPLE_WIDTH}-byte samples, got {sample_width}")

    span = valid_byte_span(samples, channels, sample_width)
    view = memoryview(buffer).cast("B")
    if span > view.nbytes:
        raise CodecError(
            f"Frame buffer holds {view.nbytes} bytes but {samples} samples x "
            f"{channels} channels need {span}"
        )
    return np.frombuffer(view[:span], dtype=np.float32).copy()


def frame_samples(frame: Any) -> np.ndarray:
    """Extract the samples of a packed float32 frame."""
    return extract_samples(frame.planes[0], frame.samples, channel_count(frame))


class PcmBuffer:
    """Append-only float32 sample buffer."""

    def __init__(self) -> None:
        self._chunks: list[np.ndarray] = []
        self._length = 0

    def __len__(self) -> int:
        return self._length

    def append(self, samples: np.ndarray) -> None:
        if samples.size:
            self._chunks.append(samples)
            self._length += samples.size

    def append_frame(self, frame: Any) -> None:
        self.append(frame_samples(frame))

    def to_array(self) -> np.ndarray:
        """Return every appended sample as one contiguous array."""
        if not self._chunks:
            return np.zeros(0, dtype=np.float32)
        return np.concatenate(self._chunks)
