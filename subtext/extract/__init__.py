"""
subtext.extract - Audio extraction from media containers.

Pipeline Stage 1: Decode the best audio stream of any container FFmpeg can
read and resample it to mono float32 PCM for Whisper.
"""

from __future__ import annotations
