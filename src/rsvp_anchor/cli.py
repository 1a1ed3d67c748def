from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, TypedDict

import typer
import yaml

from .config import InvalidConfigurationError, RsvpConfig, load_config, validate_config
from .driver import PlaybackDriver
from .models import PivotResult, SessionAnalytics, Tick
from .pivot import PivotEngine, split_at_pivot
from .scheduler import PlaybackScheduler
from .tokenization import join_chunk, split_words

app = typer.Typer(help="Anchored RSVP reader CLI.", no_args_is_help=True)


class ChunkPayload(TypedDict):
    index: int
    text: str
    pivot_index: int
    anchor_char: str
    rate: float
    delay_ms: float


@app.command()
def pivots(
    text: str | None = typer.Argument(None, help="Text to anchor (or use --input-path)."),
    input_path: Path | None = typer.Option(
        None, exists=True, readable=True, dir_okay=False, file_okay=True
    ),
    chunk_size: int = typer.Option(1, "--chunk-size", "-k", min=1),
) -> None:
    """Print each chunk split around its sticky-anchor pivot."""
    words = split_words(_read_text(text, input_path))
    engine = PivotEngine()
    for start in range(0, len(words), chunk_size):
        chunk_text = join_chunk(words[start : start + chunk_size])
        result = engine.process(chunk_text)
        typer.echo(_format_segments(chunk_text, result))


@app.command()
def simulate(
    text: str | None = typer.Argument(None, help="Text to read (or use --input-path)."),
    input_path: Path | None = typer.Option(
        None, exists=True, readable=True, dir_okay=False, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    wpm: float | None = typer.Option(None, "--wpm", help="Override initial_rate."),
    chunk_size: int | None = typer.Option(None, "--chunk-size", "-k"),
    acceleration: float | None = typer.Option(
        None, "--acceleration", help="Override acceleration_per_word."
    ),
    log_level: str = typer.Option("WARNING", "--log-level"),
) -> None:
    """Run a full session on a virtual clock and emit chunks + analytics as JSON."""
    _configure_logging(log_level)
    cfg = _build_config(config, wpm, chunk_size, acceleration)
    clock = _VirtualClock()
    scheduler = PlaybackScheduler(cfg, clock=clock)
    scheduler.load_text(_read_text(text, input_path))
    scheduler.start()

    chunks: List[ChunkPayload] = []
    while True:
        result = scheduler.tick()
        if not isinstance(result, Tick):
            break
        pivot = scheduler.engine.process(result.text)
        chunks.append(_chunk_dict(result, pivot))
        # Advance virtual time by the delay the host would have waited.
        clock.advance(result.delay_ms)

    analytics = scheduler.get_analytics()
    typer.echo(
        json.dumps(
            {
                "chunks": chunks,
                "analytics": analytics.to_dict() if analytics else None,
            },
            indent=2,
        )
    )


@app.command()
def play(
    text: str | None = typer.Argument(None, help="Text to read (or use --input-path)."),
    input_path: Path | None = typer.Option(
        None, exists=True, readable=True, dir_okay=False, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    wpm: float | None = typer.Option(None, "--wpm", help="Override initial_rate."),
    chunk_size: int | None = typer.Option(None, "--chunk-size", "-k"),
    acceleration: float | None = typer.Option(
        None, "--acceleration", help="Override acceleration_per_word."
    ),
    log_level: str = typer.Option("WARNING", "--log-level"),
) -> None:
    """Read the text in real time in the terminal, then print the session report."""
    _configure_logging(log_level)
    cfg = _build_config(config, wpm, chunk_size, acceleration)
    scheduler = PlaybackScheduler(cfg)
    report: dict[str, SessionAnalytics | None] = {}

    def show(tick: Tick, pivot: PivotResult) -> None:
        typer.echo(f"{_format_segments(tick.text, pivot)}    ({tick.rate:.0f} WPM)")

    def finish(analytics: SessionAnalytics | None) -> None:
        report["analytics"] = analytics

    driver = PlaybackDriver(scheduler, on_chunk=show, on_complete=finish)
    driver.load_text(_read_text(text, input_path))
    if not scheduler.sequence:
        typer.echo("Nothing to read.", err=True)
        raise typer.Exit(code=1)
    driver.play()
    try:
        driver.wait()
    except KeyboardInterrupt:
        driver.pause()
        typer.echo("Paused.", err=True)

    analytics = report.get("analytics") or scheduler.get_analytics()
    if analytics is not None:
        typer.echo(_format_report(analytics))


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = RsvpConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


def _build_config(
    config_path: Path | None,
    wpm: float | None,
    chunk_size: int | None,
    acceleration: float | None,
) -> RsvpConfig:
    """Load YAML config, apply CLI overrides, and validate the result."""
    try:
        cfg = load_config(config_path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc
    if wpm is not None:
        cfg.initial_rate = wpm
    if chunk_size is not None:
        cfg.chunk_size = chunk_size
    if acceleration is not None:
        cfg.acceleration_per_word = acceleration
    try:
        return validate_config(cfg)
    except InvalidConfigurationError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _read_text(text: str | None, input_path: Path | None) -> str:
    if input_path is not None:
        return input_path.read_text(encoding="utf-8")
    if text is None:
        raise typer.BadParameter("Provide TEXT or --input-path.")
    return text


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _format_segments(text: str, pivot: PivotResult) -> str:
    left, center, right = split_at_pivot(text, pivot.pivot_index)
    return f"{left}[{center}]{right}"


def _chunk_dict(tick: Tick, pivot: PivotResult) -> ChunkPayload:
    return {
        "index": tick.index,
        "text": tick.text,
        "pivot_index": pivot.pivot_index,
        "anchor_char": pivot.anchor_char,
        "rate": tick.rate,
        "delay_ms": tick.delay_ms,
    }


def _format_report(analytics: SessionAnalytics) -> str:
    return (
        f"Average: {analytics.average_rate} WPM | "
        f"Peak: {analytics.peak_rate} WPM | "
        f"Time: {analytics.total_elapsed_seconds:.1f}s | "
        f"Chunks: {len(analytics.samples)}"
    )


class _VirtualClock:
    """Millisecond clock that only moves when advanced."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, millis: float) -> None:
        self.now += millis


if __name__ == "__main__":
    main()
