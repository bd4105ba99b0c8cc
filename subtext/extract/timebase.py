"""
subtext.extract.timebase - Time base conversion.

Converts between raw container timestamps and seconds. A time base is the
rational number of seconds per raw tick, so both directions go through the
same factor.
"""

from __future__ import annotations

from fractions import Fraction


def to_seconds(time_base: Fraction, raw_timestamp: int) -> float:
    """Convert a raw timestamp in time base units to seconds.

    Args:
        time_base: Seconds per raw tick (e.g. Fraction(1, 44100))
        raw_timestamp: Timestamp in time base units

    Returns:
        Time in seconds
    """
    return raw_timestamp * float(time_base)


def to_raw(time_base: Fraction, seconds: float) -> int:
    """Convert seconds to a raw timestamp in time base units.

    The result is truncated toward zero.

    Args:
        time_base: Seconds per raw tick
        seconds: Time in seconds

    Returns:
        Timestamp in time base units
    """
    return int(seconds / float(time_base))
