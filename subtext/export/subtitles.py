"""
subtext.export.subtitles - SubRip and WebVTT rendering.
"""

from __future__ import annotations

from collections.abc import Iterable

from subtext.export.timecode import seconds_to_timestamp
from subtext.transcribe.engine import Segment

FORMATS = ("srt", "vtt")


def format_srt_cue(text: str, index: int, start: float, end: float) -> str:
    """Render one numbered SubRip cue, followed by a blank line."""
    return (
        f"{index}\n"
        f"{seconds_to_timestamp(start)} --> {seconds_to_timestamp(end)}\n"
        f"{text}\n\n"
    )


def render_srt(segments: Iterable[Segment]) -> str:
    """Render segments as a SubRip document, cues numbered from 1."""
    return "".join(
        format_srt_cue(seg.text, i, seg.start, seg.end) for i, seg in enumerate(segments, start=1)
    )


def render_vtt(segments: Iterable[Segment]) -> str:
    """Render segments as a WebVTT document."""
    cues = [
        f"{seconds_to_timestamp(seg.start, '.')} --> {seconds_to_timestamp(seg.end, '.')}\n"
        f"{seg.text}\n\n"
        for seg in segments
    ]
    return "WEBVTT\n\n" + "".join(cues)


def render_subtitles(segments: Iterable[Segment], fmt: str = "srt") -> str:
    """Render segments in the given subtitle format.

    Raises:
        ValueError: If the format is not one of FORMATS
    """
    if fmt == "srt":
        return render_srt(segments)
    if fmt == "vtt":
        return render_vtt(segments)
    raise ValueError(f"Unknown subtitle format: {fmt}")
