"""
subtext.extract.streams - Audio stream selection.
"""

from __future__ import annotations

from typing import Any

from subtext.exceptions import NoAudioStreamFound


def find_best_stream(container) -> Any:
    """Find the "best" audio stream in a container.

    Ranking is left to FFmpeg (av_find_best_stream), which prefers streams
    it can decode and then higher channel counts and bitrates.

    Args:
        container: Open MediaContainer

    Returns:
        The selected stream

    Raises:
        NoAudioStreamFound: If the container has no audio stream
    """
    stream = container.best_audio_stream()
    if stream is None:
        raise NoAudioStreamFound(f"No audio stream found in {container.name}")
    return stream


def list_audio_streams(container) -> list[Any]:
    """Return every audio stream in the container, in index order."""
    return [s for s in container.streams if s.type == "audio"]
