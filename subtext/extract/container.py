"""
subtext.extract.container - Media container handle.

Wraps a PyAV input container and translates its errors into Subtext
exceptions. Everything downstream talks to this handle, never to PyAV's
container directly.
"""

from __future__ import annotations

from collections.abc import Iterator
from fractions import Fraction
from pathlib import Path
from typing import Any

import av

from subtext.exceptions import ContainerIOError, NoAudioStreamFound
from subtext.extract.seek import SeekWindow


class MediaContainer:
    """An open, demuxed media source."""

    def __init__(self, container: Any) -> None:
        self._container = container

    def __enter__(self) -> MediaContainer:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    @property
    def name(self) -> str:
        return self._container.name

    @property
    def time_base(self) -> Fraction:
        """Time base of ``duration`` (FFmpeg's AV_TIME_BASE, microseconds)."""
        return Fraction(1, av.time_base)

    @property
    def duration(self) -> int | None:
        """Total duration in ``time_base`` units, or None if unknown."""
        return self._container.duration

    @property
    def streams(self) -> list[Any]:
        return list(self._container.streams)

    def stream(self, index: int) -> Any:
        """Look up a stream by index.

        Raises:
            NoAudioStreamFound: If no stream has that index
        """
        for stream in self._container.streams:
            if stream.index == index:
                return stream
        raise NoAudioStreamFound(f"No stream with index {index} in {self.name}")

    def best_audio_stream(self) -> Any | None:
        return self._container.streams.best("audio")

    def packets(self) -> Iterator[Any]:
        """Lazily demux packets of every stream in file order.

        Raises:
            ContainerIOError: If reading from the container fails
        """
        demuxer = self._container.demux()
        while True:
            try:
                packet = next(demuxer)
            except StopIteration:
                return
            except (OSError, av.error.FFmpegError) as e:
                raise ContainerIOError(f"Failed to read from {self.name}: {e}") from e
            yield packet

    def seek(self, window: SeekWindow, stream: Any) -> None:
        """Move the read cursor to the keyframe at or before the target.

        PyAV has no min/max seek range; the lower bound of ``window`` is
        applied by the packet filter instead.

        Raises:
            ContainerIOError: If FFmpeg cannot seek
        """
        try:
            self._container.seek(window.target, stream=stream, backward=True)
        except av.error.FFmpegError as e:
            raise ContainerIOError(f"Failed to seek {self.name}: {e}") from e

    def close(self) -> None:
        self._container.close()


def open_container(path: Path | str) -> MediaContainer:
    """Open a media file for reading.

    Raises:
        ContainerIOError: If the file is missing or not a media container
    """
    try:
        container = av.open(str(path), mode="r")
    except (OSError, av.error.FFmpegError) as e:
        raise ContainerIOError(f"Cannot open {path}: {e}") from e
    return MediaContainer(container)
