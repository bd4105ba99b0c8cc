"""
subtext.cli - Typer CLI entry point.

Provides the subcommands for the Subtext pipeline.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from subtext import __version__
from subtext.config import (
    CONFIG_FILENAME,
    SubtextConfig,
    create_default_config,
    load_config,
    write_config,
)
from subtext.exceptions import SubtextError
from subtext.export.subtitles import render_subtitles
from subtext.extract.audio import WHISPER_SAMPLE_RATE, extract_audio
from subtext.extract.container import open_container
from subtext.extract.streams import list_audio_streams
from subtext.extract.timebase import to_seconds
from subtext.io import write_text, write_wav
from subtext.logging import configure_logging
from subtext.transcribe.engine import transcribe_samples
from subtext.utils import format_duration, parse_duration

app = typer.Typer(
    name="subtext",
    help="Whisper subtitles for any audio or video file.\n\n"
    "Decodes the best audio stream with FFmpeg, transcribes it with Whisper "
    "and prints SubRip or WebVTT subtitles.",
    add_completion=False,
)
# Subtitles go to stdout; progress and errors go to stderr.
console = Console(stderr=True)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"subtext {__version__}")
        raise typer.Exit()


def parse_time_option(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return parse_duration(value)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Subtext - Whisper subtitles for any audio or video file."""
    pass


def resolve_config(config_path: Path | None, **overrides) -> SubtextConfig:
    """Load config or exit with a readable error."""
    try:
        return load_config(config_path, overrides)
    except (SubtextError, FileNotFoundError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command("init")
def init_config(
    path: str = typer.Option(".", "--path", "-d", help="Directory to write subtext.yaml in"),
) -> None:
    """Write a default subtext.yaml."""
    config_path = Path(path) / CONFIG_FILENAME
    if config_path.exists():
        console.print(f"[red]Error: '{config_path}' already exists[/red]")
        raise typer.Exit(1)

    write_config(create_default_config(), config_path)
    console.print(f"[green]✓[/green] Wrote {config_path}")


@app.command("transcribe")
def transcribe(
    path: Path = typer.Argument(..., help="Path to video or audio file"),
    model: str | None = typer.Option(None, "--model", "-m", help="Whisper model size or path"),
    backend: str | None = typer.Option(None, "--backend", "-b", help="Whisper backend: faster or mlx"),
    language: str | None = typer.Option(None, "--language", "-l", help="Spoken language code"),
    translate: bool = typer.Option(False, "--translate", help="Translate speech to English"),
    threaded_decoding: bool = typer.Option(
        False, "--threaded-decoding", help="Enable multi-threaded decoding in FFmpeg"
    ),
    seek: str | None = typer.Option(
        None, "--seek", "-s", help="Start position (seconds, MM:SS or HH:MM:SS)"
    ),
    duration: str | None = typer.Option(
        None, "--duration", "-t", help="Amount of audio to transcribe"
    ),
    fmt: str | None = typer.Option(None, "--format", "-f", help="Subtitle format: srt or vtt"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write subtitles to a file"),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Path to subtext.yaml"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Transcribe a media file and print subtitles."""
    configure_logging(verbose)
    config = resolve_config(
        config_path,
        whisper_model=model,
        whisper_backend=backend,
        whisper_language=language,
        translate=translate or None,
        threaded_decoding=threaded_decoding or None,
        seek_to=parse_time_option(seek),
        duration=parse_time_option(duration),
        subtitle_format=fmt,
    )

    try:
        samples = extract_audio(
            path,
            duration=config.duration,
            seek_to=config.seek_to,
            sample_rate=WHISPER_SAMPLE_RATE,
            threaded=config.threaded_decoding,
            console=console,
        )
        segments = transcribe_samples(
            samples,
            model=config.whisper_model,
            language=config.whisper_language,
            backend=config.whisper_backend,
            translate=config.translate,
            console=console,
        )
    except SubtextError as e:
        console.print(f"[red]Error: {e}[/red]")
        hint = getattr(e, "install_hint", None)
        if hint:
            console.print(f"[dim]Install with: {hint}[/dim]")
        raise typer.Exit(1)

    subtitles = render_subtitles(segments, config.subtitle_format)
    if output:
        write_text(output, subtitles)
        console.print(f"[green]✓[/green] Wrote {len(segments)} cue(s) to {output}")
    else:
        typer.echo(subtitles, nl=False)


@app.command("extract")
def extract(
    path: Path = typer.Argument(..., help="Path to video or audio file"),
    output: Path = typer.Argument(..., help="Destination WAV file"),
    sample_rate: int | None = typer.Option(None, "--sample-rate", "-r", help="Output rate in Hz"),
    threaded_decoding: bool = typer.Option(
        False, "--threaded-decoding", help="Enable multi-threaded decoding in FFmpeg"
    ),
    seek: str | None = typer.Option(None, "--seek", "-s", help="Start position"),
    duration: str | None = typer.Option(None, "--duration", "-t", help="Amount of audio"),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Path to subtext.yaml"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Decode the best audio stream to a 16-bit mono WAV file."""
    configure_logging(verbose)
    config = resolve_config(
        config_path,
        sample_rate=sample_rate,
        threaded_decoding=threaded_decoding or None,
        seek_to=parse_time_option(seek),
        duration=parse_time_option(duration),
    )

    try:
        samples = extract_audio(
            path,
            duration=config.duration,
            seek_to=config.seek_to,
            sample_rate=config.sample_rate,
            threaded=config.threaded_decoding,
            console=console,
        )
    except SubtextError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    write_wav(output, samples, config.sample_rate)
    seconds = len(samples) / config.sample_rate
    console.print(
        f"[green]✓[/green] Wrote {format_duration(seconds)} of audio "
        f"({len(samples)} samples at {config.sample_rate}Hz) to {output}"
    )


@app.command("streams")
def streams(
    path: Path = typer.Argument(..., help="Path to video or audio file"),
) -> None:
    """List the audio streams of a media file."""
    try:
        with open_container(path) as container:
            audio_streams = list_audio_streams(container)
            best = container.best_audio_stream()
            best_index = best.index if best is not None else None

            table = Table(title=f"Audio streams in {path.name}")
            table.add_column("Index", style="cyan")
            table.add_column("Codec", style="green")
            table.add_column("Channels", style="green")
            table.add_column("Sample Rate", style="green")
            table.add_column("Duration", style="green")
            table.add_column("Best", style="yellow")

            for stream in audio_streams:
                ctx = stream.codec_context
                stream_duration = None
                if stream.duration is not None and stream.time_base is not None:
                    stream_duration = to_seconds(stream.time_base, stream.duration)
                table.add_row(
                    str(stream.index),
                    ctx.name,
                    str(len(ctx.layout.channels)),
                    f"{ctx.sample_rate} Hz",
                    format_duration(stream_duration),
                    "✓" if stream.index == best_index else "",
                )
    except SubtextError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not audio_streams:
        console.print(f"[yellow]No audio streams in {path.name}[/yellow]")
        return
    console.print(table)


if __name__ == "__main__":
    app()
