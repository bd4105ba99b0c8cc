"""
subtext.exceptions - Custom exception classes.

All Subtext-specific exceptions inherit from SubtextError.
"""


class SubtextError(Exception):
    """Base exception for all Subtext errors."""

    pass


class ConfigError(SubtextError):
    """Configuration loading or validation error."""

    pass


class NoAudioStreamFound(SubtextError):
    """Container has no usable audio stream."""

    pass


class SeekOutOfBounds(SubtextError):
    """Requested seek window does not fit inside the container duration."""

    def __init__(self, target: float, duration: float | None, message: str | None = None):
        self.target = target
        self.duration = duration
        if message is None:
            message = (
                f"cannot seek to {target:.3f}s: window must end before "
                f"the stream duration ({duration:.3f}s)"
            )
        super().__init__(message)


class CodecError(SubtextError):
    """Decode or resample failure reported by FFmpeg."""

    pass


class ContainerIOError(SubtextError):
    """Container could not be opened or read."""

    pass


class FormatChangedError(SubtextError):
    """Frame format no longer matches the one a resampler was built for.

    Raised by a resampler and handled by the resampler adapter, which swaps
    in a resampler for the new format. It never leaves the decode loop.
    """

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(f"audio format changed from {expected} to {actual}")


class UnsupportedFormatTransition(SubtextError):
    """A replacement resampler for a changed format could not be used."""

    pass


class ResamplerStateError(SubtextError):
    """Resampler failed for a reason other than a format change."""

    pass


class ThreadingConfigError(SubtextError):
    """Available CPU count could not be determined."""

    pass


class TranscriptionError(SubtextError):
    """Transcription error."""

    pass


class DependencyError(SubtextError):
    """Required dependency missing or misconfigured."""

    def __init__(self, dependency: str, message: str, install_hint: str | None = None):
        self.dependency = dependency
        self.message = message
        self.install_hint = install_hint
        super().__init__(f"{dependency}: {message}")
