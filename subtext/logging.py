"""
subtext.logging - Centralized logging configuration.

Provides a simple logging setup with optional verbose mode for debugging.
FFmpeg's own log output is routed through the same switch.
"""

from __future__ import annotations

import logging

import av.logging

logger = logging.getLogger("subtext")


def configure_logging(verbose: bool = False) -> None:
    """Configure logging for the subtext package.

    Args:
        verbose: If True, enable DEBUG level logging and verbose FFmpeg
            output; otherwise WARNING level and FFmpeg fatal errors only
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )
    av.logging.set_level(av.logging.VERBOSE if verbose else av.logging.FATAL)
