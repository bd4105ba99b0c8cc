"""
Test configuration and shared fixtures.

The fakes below stand in for PyAV containers, codec contexts and
resamplers. Every decoded frame carries a ``value`` that the fake
resampler writes into its output samples, so tests can tell which packet
each output sample came from.
"""

from __future__ import annotations

from fractions import Fraction
from types import SimpleNamespace

import numpy as np
import pytest
import yaml

from subtext.exceptions import NoAudioStreamFound
from subtext.extract.resample import Resampler

CHANNELS = {"mono": 1, "stereo": 2, "5.1": 6}


class FakeLayout:
    def __init__(self, name: str) -> None:
        self.name = name
        self.channels = tuple(range(CHANNELS[name]))


class FakeFrame:
    """A decoded frame as the codec would produce it."""

    def __init__(
        self,
        samples: int = 960,
        layout: str = "stereo",
        sample_format: str = "fltp",
        sample_rate: int = 48000,
        value: float = 0.0,
    ) -> None:
        self.samples = samples
        self.layout = FakeLayout(layout)
        self.format = SimpleNamespace(name=sample_format)
        self.sample_rate = sample_rate
        self.value = value


class FakeOutputFrame:
    """Packed float32 mono frame whose plane carries alignment padding."""

    def __init__(self, samples: int, value: float, sample_rate: int, padding: int = 64) -> None:
        self.samples = samples
        self.layout = FakeLayout("mono")
        self.format = SimpleNamespace(name="flt")
        self.sample_rate = sample_rate
        self.planes = [np.full(samples, value, dtype=np.float32).tobytes() + b"\x7f" * padding]


class FakeResamplerBackend:
    """Mimics av.AudioResampler: converts sample counts by rate ratio.

    ``chunk`` splits each conversion into several output frames, and
    ``tail`` is how many samples are released when flushed with None.
    """

    def __init__(self, rate: int, chunk: int | None = None, tail: int = 0, fail: Exception | None = None):
        self.rate = rate
        self.chunk = chunk
        self.tail = tail
        self.fail = fail
        self.inputs: list = []

    def resample(self, frame):
        self.inputs.append(frame)
        if self.fail is not None:
            raise self.fail
        if frame is None:
            return [FakeOutputFrame(self.tail, -1.0, self.rate)] if self.tail else []
        total = frame.samples * self.rate // frame.sample_rate
        if total == 0:
            return []
        size = self.chunk or total
        frames = []
        for start in range(0, total, size):
            frames.append(FakeOutputFrame(min(size, total - start), frame.value, self.rate))
        return frames


class ResamplerFactory:
    """Builds Resamplers over fake backends and remembers each one."""

    def __init__(self, **backend_kwargs) -> None:
        self.backend_kwargs = backend_kwargs
        self.built: list[Resampler] = []
        self.reject: set[str] = set()

    def __call__(self, source, target) -> Resampler:
        if source.layout in self.reject:
            raise ValueError(f"unsupported layout {source.layout}")
        resampler = Resampler(
            source,
            target,
            backend=FakeResamplerBackend(target.sample_rate, **self.backend_kwargs),
        )
        self.built.append(resampler)
        return resampler


class FakePacket:
    def __init__(self, stream_index: int, pts: int | None, frames=(), corrupt: bool = False) -> None:
        self.stream_index = stream_index
        self.pts = pts
        self.frames = list(frames)
        self.corrupt = corrupt


class FakeCodecContext:
    def __init__(
        self,
        layout: str | None = "stereo",
        sample_format: str | None = "fltp",
        sample_rate: int = 48000,
        eof_frames=(),
    ) -> None:
        self.format = SimpleNamespace(name=sample_format) if sample_format else None
        self.layout = FakeLayout(layout) if layout else None
        self.sample_rate = sample_rate
        self.eof_frames = list(eof_frames)
        self.thread_type = None
        self.thread_count = 0
        self.decoded: list = []

    def decode(self, packet=None):
        import av

        self.decoded.append(packet)
        if packet is None:
            return list(self.eof_frames)
        if packet.corrupt:
            raise av.error.FFmpegError(1094995529, "Invalid data found when processing input")
        return list(packet.frames)


class FakeStream:
    def __init__(
        self,
        index: int = 0,
        type: str = "audio",
        time_base: Fraction = Fraction(1, 1000),
        codec_context: FakeCodecContext | None = None,
    ) -> None:
        self.index = index
        self.type = type
        self.time_base = time_base
        self.codec_context = codec_context if codec_context is not None else FakeCodecContext()


class FakeContainer:
    """In-memory MediaContainer.

    ``seek`` moves the cursor back to the last packet of the stream at or
    before the target, unless ``seek_lands_at`` forces a packet position.
    """

    def __init__(
        self,
        streams,
        packets,
        duration_seconds: float | None = None,
        seek_lands_at: int | None = None,
        name: str = "fake.mkv",
    ) -> None:
        self.name = name
        self.time_base = Fraction(1, 1_000_000)
        self.duration = None if duration_seconds is None else int(duration_seconds * 1_000_000)
        self.streams = list(streams)
        self._packets = list(packets)
        self._cursor = 0
        self.seek_lands_at = seek_lands_at
        self.consumed = 0
        self.seeks: list = []

    def stream(self, index: int):
        for stream in self.streams:
            if stream.index == index:
                return stream
        raise NoAudioStreamFound(f"No stream with index {index}")

    def best_audio_stream(self):
        return next((s for s in self.streams if s.type == "audio"), None)

    def packets(self):
        while self._cursor < len(self._packets):
            packet = self._packets[self._cursor]
            self._cursor += 1
            self.consumed += 1
            yield packet

    def seek(self, window, stream) -> None:
        self.seeks.append((window, stream))
        if self.seek_lands_at is not None:
            self._cursor = self.seek_lands_at
            return
        self._cursor = 0
        for i, packet in enumerate(self._packets):
            if packet.stream_index == stream.index and packet.pts is not None and packet.pts <= window.target:
                self._cursor = i


def audio_session(pts_values, duration_seconds=None, frame_kwargs=None, **container_kwargs):
    """Container with one audio stream; each packet decodes to one frame tagged with its PTS."""
    frame_kwargs = frame_kwargs or {}
    stream = FakeStream()
    packets = [
        FakePacket(0, pts, frames=[FakeFrame(value=float(pts if pts is not None else -99), **frame_kwargs)])
        for pts in pts_values
    ]
    return FakeContainer([stream], packets, duration_seconds=duration_seconds, **container_kwargs)


@pytest.fixture
def resampler_factory() -> ResamplerFactory:
    """Return a resampler factory backed by fake resamplers."""
    return ResamplerFactory()


@pytest.fixture
def tmp_config(tmp_path):
    """Write a subtext.yaml with non-default values and return its path."""
    config_path = tmp_path / "subtext.yaml"
    with open(config_path, "w") as f:
        yaml.dump({"whisper_model": "small", "subtitle_format": "vtt", "sample_rate": 22050}, f)
    return config_path
