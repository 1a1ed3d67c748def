from __future__ import annotations

import math
from typing import List, Sequence

from .models import HeatmapSample, SessionAnalytics, SessionSample


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return int(math.floor(value + 0.5))


def normalize_intensity(rate: float, lowest: float, highest: float) -> float:
    """Scale ``rate`` into [0, 1] relative to the session's rate range."""
    if highest == lowest:
        return 0.0
    return (rate - lowest) / (highest - lowest)


def build_heatmap(samples: Sequence[SessionSample]) -> List[HeatmapSample]:
    """Attach a normalized intensity to every recorded chunk."""
    if not samples:
        return []
    lowest = min(sample.rate for sample in samples)
    highest = max(sample.rate for sample in samples)
    return [
        HeatmapSample(
            text=sample.chunk_text,
            rate=sample.rate,
            normalized_intensity=normalize_intensity(sample.rate, lowest, highest),
        )
        for sample in samples
    ]


def compute_analytics(samples: Sequence[SessionSample]) -> SessionAnalytics | None:
    """Summarize a session's time series; ``None`` when nothing was recorded."""
    if not samples:
        return None
    rates = [sample.rate for sample in samples]
    return SessionAnalytics(
        average_rate=round_half_up(sum(rates) / len(rates)),
        peak_rate=max(rates),
        total_elapsed_seconds=samples[-1].elapsed_millis / 1000,
        samples=build_heatmap(samples),
    )
