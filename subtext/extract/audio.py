"""
subtext.extract.audio - Decode audio to mono float32 PCM.

Pipeline Stage 1: select a stream, optionally seek into it, decode its
packets and resample every frame to packed float32 mono at the target
rate (16kHz for Whisper).
"""

from __future__ import annotations

from pathlib import Path

import numpy as np

from subtext.extract.container import open_container
from subtext.extract.decoder import Decoder
from subtext.extract.formats import AudioFormat
from subtext.extract.packets import iter_stream_packets
from subtext.extract.pcm import PcmBuffer
from subtext.extract.resample import Resampler, ResamplerAdapter, ResamplerFactory
from subtext.extract.seek import seek_to_timestamp
from subtext.extract.streams import find_best_stream
from subtext.extract.timebase import to_raw
from subtext.logging import logger

WHISPER_SAMPLE_RATE = 16000


def decode(
    container,
    stream_index: int,
    duration: float | None = None,
    seek_to: float | None = None,
    target_sample_rate: int = WHISPER_SAMPLE_RATE,
    threaded: bool = False,
    resampler_factory: ResamplerFactory = Resampler,
) -> np.ndarray:
    """Decode and resample one audio stream into mono float32 samples.

    Packets with an unknown or non-positive PTS are skipped; containers
    emit those after trim edits.

    Args:
        container: Open MediaContainer
        stream_index: Index of the audio stream to decode
        duration: Seconds of audio to decode, counted from ``seek_to``
        seek_to: Start position in seconds
        target_sample_rate: Output sample rate in Hz
        threaded: Enable frame-threaded decoding
        resampler_factory: Builds a Resampler for a (source, target) pair

    Returns:
        1-D float32 array of samples at ``target_sample_rate``

    Raises:
        SubtextError: The first fatal error; no partial output is returned
    """
    stream = container.stream(stream_index)
    time_base = stream.time_base

    end_timestamp = None
    if duration is not None:
        end_timestamp = to_raw(time_base, (seek_to or 0.0) + duration)

    start_timestamp = None
    if seek_to is not None:
        start_timestamp = seek_to_timestamp(container, stream, seek_to).min_ts

    decoder = Decoder.from_stream(stream, threaded)
    adapter = ResamplerAdapter(
        decoder.output_format,
        AudioFormat.target(target_sample_rate),
        resampler_factory,
    )
    pcm = PcmBuffer()

    packets = iter_stream_packets(
        container.packets(),
        stream_index,
        end_timestamp=end_timestamp,
        start_timestamp=start_timestamp,
    )
    skipped = 0
    for packet in packets:
        if packet.pts is None or packet.pts <= 0:
            skipped += 1
            continue
        decoder.send_packet(packet)
        _drain_decoder(decoder, adapter, pcm)

    decoder.send_eof()
    _drain_decoder(decoder, adapter, pcm)
    adapter.finish(pcm)

    logger.debug(
        "Decoded %d samples at %dHz from stream %d (%d packets skipped, %d format changes)",
        len(pcm),
        target_sample_rate,
        stream_index,
        skipped,
        adapter.transitions,
    )
    return pcm.to_array()


def _drain_decoder(decoder: Decoder, adapter: ResamplerAdapter, pcm: PcmBuffer) -> None:
    while True:
        frame = decoder.receive_frame()
        if frame is None:
            return
        adapter.convert(frame, pcm)


def extract_audio(
    source_path: Path,
    duration: float | None = None,
    seek_to: float | None = None,
    sample_rate: int = WHISPER_SAMPLE_RATE,
    threaded: bool = False,
    console=None,
) -> np.ndarray:
    """Extract the best audio stream of a media file as mono float32 PCM.

    Args:
        source_path: Path to source audio or video file
        duration: Seconds of audio to decode
        seek_to: Start position in seconds
        sample_rate: Output sample rate in Hz
        threaded: Enable frame-threaded decoding
        console: Optional rich console for output

    Returns:
        1-D float32 array of samples

    Raises:
        ContainerIOError: If the file cannot be opened or read
        NoAudioStreamFound: If the file has no audio stream
        SubtextError: Any other decode failure
    """
    with open_container(source_path) as container:
        stream = find_best_stream(container)
        if console:
            console.print(f"[dim]  Decoding audio stream {stream.index}...[/dim]")
        return decode(
            container,
            stream.index,
            duration=duration,
            seek_to=seek_to,
            target_sample_rate=sample_rate,
            threaded=threaded,
        )
