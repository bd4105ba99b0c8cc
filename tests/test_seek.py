"""Tests for subtext.extract.seek module."""

from __future__ import annotations

from fractions import Fraction

import pytest
from conftest import FakePacket, FakeStream, FakeContainer

from subtext.exceptions import SeekOutOfBounds
from subtext.extract.seek import SeekWindow, seek_to_timestamp, seek_window


def make_container(duration_seconds: float | None) -> tuple[FakeContainer, FakeStream]:
    stream = FakeStream(time_base=Fraction(1, 1000))
    packets = [FakePacket(0, pts) for pts in range(0, 10_000, 500)]
    return FakeContainer([stream], packets, duration_seconds=duration_seconds), stream


class TestSeekWindow:
    def test_window_spans_one_second_each_side(self) -> None:
        window = seek_window(Fraction(1, 1000), 5.0)
        assert window == SeekWindow(target=5000, min_ts=4000, max_ts=6000)

    def test_lower_bound_clamped_to_zero(self) -> None:
        window = seek_window(Fraction(1, 1000), 0.5)
        assert window.min_ts == 0
        assert window.target == 500
        assert window.max_ts == 1500

    def test_uses_stream_time_base(self) -> None:
        window = seek_window(Fraction(1, 48000), 2.0)
        assert abs(window.target - 96000) <= 1
        assert abs(window.min_ts - 48000) <= 1
        assert abs(window.max_ts - 144000) <= 1


class TestSeekToTimestamp:
    def test_repositions_container(self) -> None:
        container, stream = make_container(10.0)
        window = seek_to_timestamp(container, stream, 3.0)
        assert container.seeks == [(window, stream)]
        assert window.target == 3000

    def test_window_past_end_raises(self) -> None:
        container, stream = make_container(10.0)
        with pytest.raises(SeekOutOfBounds):
            seek_to_timestamp(container, stream, 9.5)
        assert container.seeks == []

    def test_window_ending_exactly_at_duration_raises(self) -> None:
        container, stream = make_container(10.0)
        with pytest.raises(SeekOutOfBounds) as exc_info:
            seek_to_timestamp(container, stream, 9.0)
        assert exc_info.value.duration == pytest.approx(10.0)

    def test_window_just_inside_duration(self) -> None:
        container, stream = make_container(10.0)
        seek_to_timestamp(container, stream, 8.99)
        assert len(container.seeks) == 1

    def test_negative_target_raises(self) -> None:
        container, stream = make_container(10.0)
        with pytest.raises(SeekOutOfBounds):
            seek_to_timestamp(container, stream, -1.0)

    def test_unknown_duration_raises(self) -> None:
        container, stream = make_container(None)
        with pytest.raises(SeekOutOfBounds, match="duration is unknown"):
            seek_to_timestamp(container, stream, 1.0)
