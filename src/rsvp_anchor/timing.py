from __future__ import annotations

from typing import Sequence

SENTENCE_END_CHARS = (".", "!", "?")
CLAUSE_END_CHARS = (",", ";")

SENTENCE_PAUSE_FACTOR = 1.5
CLAUSE_PAUSE_FACTOR = 0.5


def ms_per_word(rate: float) -> float:
    """Milliseconds each word stays on screen at ``rate`` words per minute."""
    return 60000.0 / rate


def clamp_rate(rate: float, min_rate: float, max_rate: float) -> float:
    return min(max(rate, min_rate), max_rate)


def punctuation_pause_factor(word: str) -> float:
    """Extra word-durations to hold after ``word`` based on its final character."""
    if word.endswith(SENTENCE_END_CHARS):
        return SENTENCE_PAUSE_FACTOR
    if word.endswith(CLAUSE_END_CHARS):
        return CLAUSE_PAUSE_FACTOR
    return 0.0


def compute_delay(chunk: Sequence[str], rate: float) -> float:
    """
    Return the display time in milliseconds for ``chunk`` at ``rate`` WPM.

    Each word gets one word-duration; the last word in the chunk adds a pause
    when it closes a sentence or clause.
    """
    if not chunk:
        return 0.0
    per_word = ms_per_word(rate)
    base = per_word * len(chunk)
    extra = per_word * punctuation_pause_factor(chunk[-1])
    return base + extra
