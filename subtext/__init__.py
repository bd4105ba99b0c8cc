"""
Subtext - Whisper subtitles for any audio or video file.

Pulls a mono float32 PCM stream out of an arbitrary container through a
three-stage pipeline: audio extraction → transcription → subtitle export.
"""

__version__ = "0.1.0"
