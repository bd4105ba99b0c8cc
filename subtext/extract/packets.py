"""
subtext.extract.packets - Per-stream packet filtering.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any


def iter_stream_packets(
    packets: Iterable[Any],
    stream_index: int,
    end_timestamp: int | None = None,
    start_timestamp: int | None = None,
) -> Iterator[Any]:
    """Yield packets of one stream, stopping at an end timestamp.

    The end bound is checked before a packet is yielded, and no further
    packet is pulled from ``packets`` once it is reached. Packets with an
    unknown PTS never end the sequence.

    Args:
        packets: Packets of every stream, in demux order
        stream_index: Index of the stream to keep
        end_timestamp: Stop at the first packet with PTS >= this value
        start_timestamp: Drop packets with PTS < this value (seek lower bound)

    Yields:
        Packets belonging to ``stream_index``
    """
    for packet in packets:
        if packet.stream_index != stream_index:
            continue
        pts = packet.pts
        if pts is not None:
            if end_timestamp is not None and pts >= end_timestamp:
                return
            if start_timestamp is not None and pts < start_timestamp:
                continue
        yield packet
