from __future__ import annotations

import re
from typing import List, Sequence

WHITESPACE_PATTERN = re.compile(r"\s+", re.UNICODE)


def split_words(text: str) -> List[str]:
    """Split raw text on whitespace, discarding empty tokens."""
    return [word for word in WHITESPACE_PATTERN.split(text.strip()) if word]


def join_chunk(words: Sequence[str]) -> str:
    """Join a chunk of words into the single string shown on screen."""
    return " ".join(words)
