"""
subtext.utils - Shared utility functions.

Duration formatting and parsing used by the CLI and configuration.
"""

from __future__ import annotations


def format_duration(seconds: float | None) -> str:
    """Format seconds as HH:MM:SS or MM:SS.

    Args:
        seconds: Duration in seconds, or None if unknown

    Returns:
        Formatted string (HH:MM:SS if >= 1 hour, otherwise MM:SS; "-" if unknown)
    """
    if seconds is None:
        return "-"
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def parse_duration(value: str) -> float:
    """Parse a duration given as seconds, MM:SS or HH:MM:SS.

    Fractional seconds are allowed in the last field ("1:05.5").

    Args:
        value: Duration string

    Returns:
        Duration in seconds

    Raises:
        ValueError: If the string is not a non-negative duration
    """
    parts = value.strip().split(":")
    if not 1 <= len(parts) <= 3 or any(p == "" for p in parts):
        raise ValueError(f"Invalid duration: {value!r}")

    try:
        *whole, last = parts
        seconds = float(last)
        fields = [int(p) for p in whole]
    except ValueError as e:
        raise ValueError(f"Invalid duration: {value!r}") from e

    if seconds < 0 or any(f < 0 for f in fields):
        raise ValueError(f"Invalid duration: {value!r}")
    if fields and seconds >= 60:
        raise ValueError(f"Invalid duration: {value!r}")

    total = 0
    for field in fields:
        total = total * 60 + field
    return total * 60 + seconds
