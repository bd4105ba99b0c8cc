"""
subtext.export.timecode - Subtitle timestamp math.

Converts float seconds to the HH:MM:SS,mmm timestamps used by SubRip
(comma) and WebVTT (period).
"""

from __future__ import annotations


def seconds_to_timestamp(seconds: float, separator: str = ",") -> str:
    """Convert float seconds to a subtitle timestamp.

    Args:
        seconds: Time in seconds; negative values clamp to zero
        separator: "," for SRT, "." for WebVTT

    Returns:
        Timestamp string in HH:MM:SS,mmm format
    """
    msec = max(round(seconds * 1000), 0)
    hh, msec = divmod(msec, 3_600_000)
    mm, msec = divmod(msec, 60_000)
    ss, msec = divmod(msec, 1000)
    return f"{hh:02d}:{mm:02d}:{ss:02d}{separator}{msec:03d}"
