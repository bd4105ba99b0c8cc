"""End-to-end extraction through FFmpeg on generated WAV files."""

from __future__ import annotations

import wave
from pathlib import Path

import numpy as np
import pytest

from subtext.exceptions import SeekOutOfBounds
from subtext.extract.audio import decode, extract_audio
from subtext.extract.container import open_container
from subtext.extract.streams import find_best_stream


def write_sine(path: Path, seconds: float, rate: int = 8000, amplitude: float = 0.5) -> Path:
    t = np.arange(int(seconds * rate)) / rate
    samples = (amplitude * np.sin(2 * np.pi * 440 * t) * 32767).astype("<i2")
    with wave.open(str(path), "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(rate)
        wf.writeframes(samples.tobytes())
    return path


@pytest.fixture
def sine_wav(tmp_path: Path) -> Path:
    return write_sine(tmp_path / "sine.wav", 3.0)


@pytest.mark.slow
class TestRealContainer:
    def test_extracts_whole_file(self, sine_wav: Path) -> None:
        samples = extract_audio(sine_wav, sample_rate=16000)
        assert samples.dtype == np.float32
        # The first packet has PTS 0 and is skipped.
        assert 0.8 * 3 * 16000 < samples.size <= 3 * 16000 + 1024
        assert 0.4 < np.abs(samples).max() < 0.6

    def test_duration_and_seek(self, sine_wav: Path) -> None:
        with open_container(sine_wav) as container:
            stream = find_best_stream(container)
            samples = decode(container, stream.index, duration=1.0, seek_to=1.0)
        assert 0.5 * 16000 < samples.size < 1.6 * 16000

    def test_seek_past_end_raises(self, sine_wav: Path) -> None:
        with open_container(sine_wav) as container:
            stream = find_best_stream(container)
            with pytest.raises(SeekOutOfBounds):
                decode(container, stream.index, seek_to=2.5)

    def test_deterministic(self, sine_wav: Path) -> None:
        first = extract_audio(sine_wav, duration=2.0)
        second = extract_audio(sine_wav, duration=2.0)
        assert first.tobytes() == second.tobytes()

    def test_threaded_decoding(self, sine_wav: Path) -> None:
        plain = extract_audio(sine_wav)
        threaded = extract_audio(sine_wav, threaded=True)
        assert plain.tobytes() == threaded.tobytes()
