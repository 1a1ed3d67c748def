"""
Pivot selection for anchored RSVP display.

Consecutive chunks are anchored on the same letter where possible so the eye
can stay fixed at one horizontal position. When the previous anchor letter is
not present the engine falls back to a center-left optimal recognition point.
"""

from __future__ import annotations

import logging
import math
from typing import Tuple

from .models import PivotResult

logger = logging.getLogger(__name__)


def fallback_pivot_index(length: int) -> int:
    """Center-left pivot: 1->0, 2->0, 3->1, 4->1, 5->2, 6->2, ..."""
    return max(0, math.ceil(length / 2) - 1)


def split_at_pivot(text: str, pivot_index: int) -> Tuple[str, str, str]:
    """Split ``text`` into the segments left of, at, and right of the pivot."""
    if not text:
        return ("", "", "")
    return (text[:pivot_index], text[pivot_index], text[pivot_index + 1 :])


class PivotEngine:
    """Chooses pivot positions, remembering the last anchor character."""

    def __init__(self) -> None:
        self.last_anchor_char: str | None = None

    def reset(self) -> None:
        """Forget the remembered anchor so a new text starts from the fallback."""
        self.last_anchor_char = None

    def process(self, text: str) -> PivotResult:
        """Return the pivot for ``text`` and remember its character."""
        if not text:
            return PivotResult(pivot_index=0, anchor_char="")

        pivot_index = self._sticky_index(text)
        if pivot_index is None:
            pivot_index = fallback_pivot_index(len(text))
        else:
            logger.debug(
                "Sticky anchor %r kept at index %d of %r",
                self.last_anchor_char,
                pivot_index,
                text,
            )

        self.last_anchor_char = text[pivot_index]
        return PivotResult(pivot_index=pivot_index, anchor_char=self.last_anchor_char)

    def _sticky_index(self, text: str) -> int | None:
        if not self.last_anchor_char:
            return None
        target = self.last_anchor_char.lower()
        center = len(text) // 2
        best: int | None = None
        for idx, char in enumerate(text):
            if char.lower() != target:
                continue
            # Strict comparison keeps the earliest match on equal distance.
            if best is None or abs(idx - center) < abs(best - center):
                best = idx
        return best
