"""
subtext.export - Subtitle export.

Pipeline Stage 3: Render transcribed segments as SubRip (.srt) or WebVTT
(.vtt) text.
"""

from __future__ import annotations
