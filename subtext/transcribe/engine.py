"""
subtext.transcribe.engine - Whisper transcription engine.

Uses faster-whisper (primary) or mlx-whisper on Apple Silicon. Takes the
16kHz mono float32 samples produced by extraction and returns timed text
segments.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from subtext.exceptions import DependencyError, TranscriptionError

BACKENDS = ("faster", "mlx")


@dataclass(frozen=True)
class Segment:
    """A transcribed span of speech, in seconds from the start of the audio."""

    text: str
    start: float
    end: float


def transcribe_samples(
    samples: np.ndarray,
    model: str = "base",
    language: str | None = None,
    backend: str = "faster",
    translate: bool = False,
    console=None,
) -> list[Segment]:
    """Transcribe mono float32 samples using Whisper.

    Args:
        samples: 16kHz mono float32 samples
        model: Whisper model size or path (tiny, base, small, medium, large)
        language: Language code (auto-detect if None)
        backend: Whisper backend (faster, mlx)
        translate: Translate speech to English instead of transcribing
        console: Optional rich console for output

    Returns:
        Segments in playback order

    Raises:
        TranscriptionError: If transcription fails
        DependencyError: If the backend package is not installed
    """
    if console:
        console.print(f"[dim]  Loading {model} model...[/dim]")

    if samples.size == 0:
        return []

    try:
        if backend == "faster":
            result = _transcribe_faster(samples, model, language, translate)
        elif backend == "mlx":
            result = _transcribe_mlx(samples, model, language, translate)
        else:
            raise TranscriptionError(f"Unknown backend: {backend}")

        return _parse_whisper_result(result)

    except (TranscriptionError, DependencyError):
        raise
    except Exception as e:
        raise TranscriptionError(f"Transcription failed: {e}") from e


def _task(translate: bool) -> str:
    return "translate" if translate else "transcribe"


def _transcribe_faster(
    samples: np.ndarray,
    model: str,
    language: str | None,
    translate: bool,
) -> dict[str, Any]:
    """Transcribe using faster-whisper."""
    try:
        from faster_whisper import WhisperModel
    except ImportError as e:
        raise DependencyError(
            "faster-whisper",
            "not installed",
            install_hint="pip install 'subtext[faster]'",
        ) from e

    model_instance = WhisperModel(model, device="auto", compute_type="auto")

    kwargs: dict[str, Any] = {"task": _task(translate)}
    if language:
        kwargs["language"] = language

    segments, info = model_instance.transcribe(samples, **kwargs)

    return {
        "language": info.language,
        "segments": [
            {"start": segment.start, "end": segment.end, "text": segment.text}
            for segment in segments
        ],
    }


def _transcribe_mlx(
    samples: np.ndarray,
    model: str,
    language: str | None,
    translate: bool,
) -> dict[str, Any]:
    """Transcribe using mlx-whisper."""
    try:
        import mlx_whisper
    except ImportError as e:
        raise DependencyError(
            "mlx-whisper",
            "not installed",
            install_hint="pip install 'subtext[mlx]'",
        ) from e

    kwargs: dict[str, Any] = {
        "path_or_hf_repo": f"mlx-community/whisper-{model}-mlx",
        "task": _task(translate),
    }
    if language:
        kwargs["language"] = language

    return mlx_whisper.transcribe(samples, **kwargs)


def _parse_whisper_result(result: dict[str, Any]) -> list[Segment]:
    """Parse a Whisper result into segments, dropping empty text."""
    segments = []
    for seg in result.get("segments", []):
        text = seg.get("text", "").strip()
        if not text:
            continue
        segments.append(
            Segment(
                text=text,
                start=float(seg.get("start", 0)),
                end=float(seg.get("end", 0)),
            )
        )
    return segments
