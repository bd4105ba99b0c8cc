"""
subtext.extract.seek - Seeking with a tolerance window.

The window spans one second either side of the requested position. It has
to end before the container does, so a seek close to the end of a file is
rejected instead of silently producing nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction

from subtext.exceptions import SeekOutOfBounds
from subtext.extract.timebase import to_raw, to_seconds
from subtext.logging import logger

SEEK_TOLERANCE_SECONDS = 1.0


@dataclass(frozen=True)
class SeekWindow:
    """Seek target and its tolerance bounds, in stream time base units."""

    target: int
    min_ts: int
    max_ts: int


def seek_window(
    time_base: Fraction,
    target: float,
    tolerance: float = SEEK_TOLERANCE_SECONDS,
) -> SeekWindow:
    """Build the raw seek window around a target position.

    Args:
        time_base: Stream time base
        target: Seek position in seconds
        tolerance: Half-width of the window in seconds

    Returns:
        SeekWindow with the lower bound clamped to zero
    """
    return SeekWindow(
        target=to_raw(time_base, target),
        min_ts=to_raw(time_base, max(target - tolerance, 0.0)),
        max_ts=to_raw(time_base, target + tolerance),
    )


def seek_to_timestamp(container, stream, target: float) -> SeekWindow:
    """Reposition the container so reads start near ``target`` seconds.

    Args:
        container: Open MediaContainer
        stream: Stream whose time base the window is expressed in
        target: Seek position in seconds

    Returns:
        The window that was applied

    Raises:
        SeekOutOfBounds: If the target is negative, the container duration
            is unknown, or the window would end at or after the duration
    """
    if target < 0:
        raise SeekOutOfBounds(target, None, f"cannot seek to negative position {target:.3f}s")

    if container.duration is None:
        raise SeekOutOfBounds(target, None, "cannot seek: container duration is unknown")

    duration = to_seconds(container.time_base, container.duration)
    if not target + SEEK_TOLERANCE_SECONDS < duration:
        raise SeekOutOfBounds(target, duration)

    window = seek_window(stream.time_base, target)
    logger.debug(
        "Seeking stream %d to %.3fs (window %d..%d)",
        stream.index,
        target,
        window.min_ts,
        window.max_ts,
    )
    container.seek(window, stream)
    return window
