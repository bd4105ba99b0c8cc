"""Tests for subtext.extract.timebase module."""

from __future__ import annotations

from fractions import Fraction

import pytest

from subtext.extract.timebase import to_raw, to_seconds


class TestToSeconds:
    def test_millisecond_time_base(self) -> None:
        assert to_seconds(Fraction(1, 1000), 2500) == pytest.approx(2.5)

    def test_sample_rate_time_base(self) -> None:
        assert to_seconds(Fraction(1, 44100), 44100 * 3) == pytest.approx(3.0)

    def test_zero(self) -> None:
        assert to_seconds(Fraction(1, 90000), 0) == 0.0

    def test_negative_timestamp(self) -> None:
        assert to_seconds(Fraction(1, 1000), -500) == pytest.approx(-0.5)


class TestToRaw:
    def test_millisecond_time_base(self) -> None:
        assert to_raw(Fraction(1, 1000), 2.5) == 2500

    def test_truncates(self) -> None:
        assert to_raw(Fraction(1, 1000), 1.0019) == 1001

    def test_returns_int(self) -> None:
        assert isinstance(to_raw(Fraction(1, 48000), 0.5), int)

    def test_both_directions_use_seconds(self) -> None:
        time_base = Fraction(1, 48000)
        assert abs(to_raw(time_base, to_seconds(time_base, 96000)) - 96000) <= 1
        assert to_seconds(time_base, to_raw(time_base, 2.0)) == pytest.approx(2.0, abs=1e-4)
