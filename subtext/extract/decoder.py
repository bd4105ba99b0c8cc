"""
subtext.extract.decoder - Thin wrapper around a PyAV audio codec context.

PyAV decodes a whole packet at once and returns every frame it produced.
The wrapper queues those frames so callers can pull them one at a time and
treat an empty queue as "send another packet".
"""

from __future__ import annotations

from collections import deque
from typing import Any

import av

from subtext.exceptions import CodecError, NoAudioStreamFound
from subtext.extract.formats import AudioFormat
from subtext.extract.threads import build_threading_config
from subtext.logging import logger


class Decoder:
    """Packet-to-frame decoder for a single audio stream."""

    def __init__(self, codec_context: Any) -> None:
        self.codec_context = codec_context
        self._frames: deque[Any] = deque()

    @classmethod
    def from_stream(cls, stream: Any, threaded: bool = False) -> Decoder:
        """Create a decoder from a stream's codec parameters.

        Args:
            stream: Audio stream to decode
            threaded: Enable frame-level parallel decoding

        Raises:
            NoAudioStreamFound: If the stream is not an audio stream
            CodecError: If the stream has no codec context
            ThreadingConfigError: If threaded and the CPU count is unknown
        """
        if stream.type != "audio":
            raise NoAudioStreamFound(f"Stream {stream.index} is {stream.type}, not audio")

        ctx = stream.codec_context
        if ctx is None:
            raise CodecError(f"Stream {stream.index} has no decoder")

        if threaded:
            config = build_threading_config()
            ctx.thread_type = config.kind
            ctx.thread_count = config.count
            logger.debug("Decoding with %d %s threads", config.count, config.kind)

        return cls(ctx)

    @property
    def output_format(self) -> AudioFormat | None:
        """Format the codec declares it will produce, if known yet."""
        ctx = self.codec_context
        fmt = getattr(ctx, "format", None)
        layout = getattr(ctx, "layout", None)
        if fmt is None or layout is None or not ctx.sample_rate:
            return None
        return AudioFormat(fmt.name, layout.name, ctx.sample_rate)

    def send_packet(self, packet: Any) -> None:
        """Decode a packet and queue the frames it produced.

        Raises:
            CodecError: If the packet cannot be decoded
        """
        try:
            frames = self.codec_context.decode(packet)
        except av.error.FFmpegError as e:
            raise CodecError(f"Failed to decode packet (pts={packet.pts}): {e}") from e
        self._frames.extend(frames)

    def send_eof(self) -> None:
        """Flush the codec and queue any frames it was still holding.

        Raises:
            CodecError: If flushing fails
        """
        try:
            frames = self.codec_context.decode(None)
        except av.error.FFmpegError as e:
            raise CodecError(f"Failed to flush decoder: {e}") from e
        self._frames.extend(frames)

    def receive_frame(self) -> Any | None:
        """Return the next decoded frame, or None if more input is needed."""
        if self._frames:
            return self._frames.popleft()
        return None
