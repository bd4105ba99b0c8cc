"""
subtext.extract.resample - Resampling to the target format.

A Resampler is bound to one source format. PyAV builds its filter graph
from the first frame it sees and refuses frames that differ, and streams
with a variable channel count do change format mid-stream. The
ResamplerAdapter recovers by building a resampler for the new format and
swapping it in for every later frame.

Converted frames are queued inside the Resampler. ``run`` and ``flush``
expose them one at a time through ``Resampler.frame`` and return the
delay: the number of converted samples still queued, or None once the
queue is empty.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from typing import Any

import av

from subtext.exceptions import (
    FormatChangedError,
    ResamplerStateError,
    UnsupportedFormatTransition,
)
from subtext.extract.formats import AudioFormat
from subtext.extract.pcm import PcmBuffer
from subtext.logging import logger


class Resampler:
    """Converts frames of one source format to the target format."""

    def __init__(
        self,
        source: AudioFormat,
        target: AudioFormat,
        backend: Any | None = None,
    ) -> None:
        self.source = source
        self.target = target
        if backend is None:
            backend = av.AudioResampler(
                format=target.sample_format,
                layout=target.layout,
                rate=target.sample_rate,
            )
        self._backend = backend
        self._pending: deque[Any] = deque()
        self.frame: Any | None = None

    @property
    def delay(self) -> int | None:
        """Converted samples still queued, or None when nothing is left."""
        if not self._pending:
            return None
        return sum(f.samples for f in self._pending)

    def run(self, frame: Any) -> int | None:
        """Convert a frame and expose the first output frame.

        Raises:
            FormatChangedError: If the frame is not in the source format
            ResamplerStateError: If conversion fails for any other reason
        """
        actual = AudioFormat.of(frame)
        if actual != self.source:
            raise FormatChangedError(self.source, actual)
        try:
            produced = self._backend.resample(frame)
        except av.error.FFmpegError as e:
            raise ResamplerStateError(f"Resampling {actual} failed: {e}") from e
        except ValueError as e:
            # PyAV: "Frame does not match AudioResampler setup."
            raise FormatChangedError(self.source, actual) from e
        self._pending.extend(produced)
        return self.flush()

    def flush(self) -> int | None:
        """Expose the next queued output frame and return the new delay."""
        self.frame = self._pending.popleft() if self._pending else None
        return self.delay

    def drain(self) -> int | None:
        """Signal end of input so the backend releases its buffered tail.

        No frame may be passed to ``run`` afterwards.

        Raises:
            ResamplerStateError: If the backend fails to flush
        """
        try:
            produced = self._backend.resample(None)
        except av.error.FFmpegError as e:
            raise ResamplerStateError(f"Flushing resampler for {self.source} failed: {e}") from e
        self._pending.extend(produced)
        return self.flush()


ResamplerFactory = Callable[[AudioFormat, AudioFormat], Resampler]


def collect(resampler: Resampler, delay: int | None, pcm: PcmBuffer) -> int:
    """Append the exposed frame, then flush until the delay is gone.

    Returns:
        Number of samples appended
    """
    appended = 0
    while True:
        if resampler.frame is not None:
            before = len(pcm)
            pcm.append_frame(resampler.frame)
            appended += len(pcm) - before
        if delay is None:
            return appended
        delay = resampler.flush()


class ResamplerAdapter:
    """Owns the active resampler and replaces it when the format changes."""

    def __init__(
        self,
        source: AudioFormat | None,
        target: AudioFormat,
        resampler_factory: ResamplerFactory = Resampler,
    ) -> None:
        self.target = target
        self._factory = resampler_factory
        self.resampler: Resampler | None = None
        self.transitions = 0
        if source is not None:
            self.resampler = resampler_factory(source, target)

    def convert(self, frame: Any, pcm: PcmBuffer) -> None:
        """Resample a decoded frame and append the result to ``pcm``.

        Raises:
            UnsupportedFormatTransition: If a format change cannot be handled
            ResamplerStateError: If the active resampler fails otherwise
            CodecError: If an output frame is malformed
        """
        if self.resampler is None:
            self.resampler = self._factory(AudioFormat.of(frame), self.target)

        try:
            delay = self.resampler.run(frame)
        except FormatChangedError as e:
            delay = self._replace(frame, e.actual, pcm)

        collect(self.resampler, delay, pcm)

    def finish(self, pcm: PcmBuffer) -> None:
        """Drain the active resampler at end of stream."""
        if self.resampler is not None:
            collect(self.resampler, self.resampler.drain(), pcm)

    def _replace(self, frame: Any, fmt: AudioFormat, pcm: PcmBuffer) -> int | None:
        previous = self.resampler
        logger.debug("Audio format changed from %s to %s, rebuilding resampler", previous.source, fmt)
        try:
            replacement = self._factory(fmt, self.target)
            collect(previous, previous.drain(), pcm)
            delay = replacement.run(frame)
        except (FormatChangedError, ResamplerStateError, ValueError, av.error.FFmpegError) as e:
            raise UnsupportedFormatTransition(
                f"Cannot resample after format change from {previous.source} to {fmt}: {e}"
            ) from e
        self.resampler = replacement
        self.transitions += 1
        return delay
