from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class PlaybackState(str, Enum):
    """Lifecycle of a playback session."""

    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"


@dataclass(slots=True, frozen=True)
class PivotResult:
    """Character position used to anchor the reader's eye within a chunk."""

    pivot_index: int
    anchor_char: str


@dataclass(slots=True, frozen=True)
class SessionSample:
    """Rate and elapsed time recorded for one displayed chunk."""

    chunk_text: str
    rate: int
    elapsed_millis: int


@dataclass(slots=True, frozen=True)
class Tick:
    """A chunk ready for display plus the delay before the next tick."""

    chunk: list[str]
    delay_ms: float
    index: int
    rate: float

    @property
    def text(self) -> str:
        return " ".join(self.chunk)


@dataclass(slots=True, frozen=True)
class SessionComplete:
    """Terminal marker returned once the word sequence is exhausted."""

    total_words: int
    samples: int


@dataclass(slots=True, frozen=True)
class HeatmapSample:
    """Per-chunk rate with its intensity normalized to [0, 1]."""

    text: str
    rate: int
    normalized_intensity: float


@dataclass(slots=True)
class SessionAnalytics:
    """Summary statistics derived from a session's time series."""

    average_rate: int
    peak_rate: int
    total_elapsed_seconds: float
    samples: list[HeatmapSample] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "average_rate": self.average_rate,
            "peak_rate": self.peak_rate,
            "total_elapsed_seconds": self.total_elapsed_seconds,
            "samples": [
                {
                    "text": sample.text,
                    "rate": sample.rate,
                    "normalized_intensity": sample.normalized_intensity,
                }
                for sample in self.samples
            ],
        }
