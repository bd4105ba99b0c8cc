"""
subtext.extract.threads - Frame-threaded decode configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from subtext.exceptions import ThreadingConfigError


@dataclass(frozen=True)
class ThreadingConfig:
    """Codec threading settings, in the form PyAV's codec context accepts."""

    kind: str
    count: int


def available_parallelism() -> int | None:
    """Number of CPUs this process may run on, or None if unknown."""
    if hasattr(os, "sched_getaffinity"):
        return len(os.sched_getaffinity(0)) or None
    return os.cpu_count()


def build_threading_config() -> ThreadingConfig:
    """Build a frame-parallel config sized to the available CPUs.

    Raises:
        ThreadingConfigError: If the CPU count cannot be determined
    """
    count = available_parallelism()
    if not count:
        raise ThreadingConfigError("unable to determine available parallelism")
    return ThreadingConfig(kind="FRAME", count=count)
