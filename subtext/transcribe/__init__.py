"""
subtext.transcribe - Whisper transcription engine.

Pipeline Stage 2: Transcribe extracted PCM using faster-whisper (primary)
or mlx-whisper. Produces timed text segments.
"""

from __future__ import annotations
