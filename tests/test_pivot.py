import pytest

from rsvp_anchor.models import PivotResult
from rsvp_anchor.pivot import PivotEngine, fallback_pivot_index, split_at_pivot


@pytest.mark.parametrize(
    ("length", "expected"),
    [(1, 0), (2, 0), (3, 1), (4, 1), (5, 2), (6, 2), (7, 3), (10, 4)],
)
def test_fallback_pivot_is_center_left(length: int, expected: int):
    assert fallback_pivot_index(length) == expected


def test_process_without_anchor_uses_fallback():
    engine = PivotEngine()
    for word in ["a", "to", "cat", "word", "apple", "banana", "example"]:
        engine.reset()
        result = engine.process(word)
        assert result.pivot_index == fallback_pivot_index(len(word))
        assert result.anchor_char == word[result.pivot_index]


def test_empty_text_is_degenerate_and_keeps_anchor():
    engine = PivotEngine()
    engine.process("cat")
    assert engine.process("") == PivotResult(pivot_index=0, anchor_char="")
    assert engine.last_anchor_char == "a"


def test_sticky_anchor_picks_match_closest_to_center():
    engine = PivotEngine()
    first = engine.process("cat")
    assert first == PivotResult(pivot_index=1, anchor_char="a")

    second = engine.process("banana")
    assert second == PivotResult(pivot_index=3, anchor_char="a")


def test_sticky_anchor_tie_prefers_earlier_index():
    """Both 'a's sit two characters from the center; the first one wins."""
    engine = PivotEngine()
    engine.process("cat")
    result = engine.process("axxxa")
    assert result.pivot_index == 0


def test_sticky_anchor_is_case_insensitive():
    engine = PivotEngine()
    engine.process("cat")
    result = engine.process("BANANA")
    assert result == PivotResult(pivot_index=3, anchor_char="A")
    assert engine.process("mat").pivot_index == 1


def test_missing_anchor_falls_back_and_updates_anchor():
    engine = PivotEngine()
    engine.process("cat")
    result = engine.process("honest")
    assert result.pivot_index == 2
    assert engine.last_anchor_char == "n"


def test_reset_clears_anchor_continuity():
    engine = PivotEngine()
    engine.process("banana")
    engine.reset()
    assert engine.last_anchor_char is None
    assert engine.process("apple") == PivotResult(pivot_index=2, anchor_char="p")

    engine.process("cat")
    engine.reset()
    # Without the reset, 'a' would stick at index 3.
    assert engine.process("banana").pivot_index == 2


def test_multi_word_chunk_can_anchor_on_space():
    engine = PivotEngine()
    assert engine.process("ab cd").anchor_char == " "
    assert engine.process("xyz w").pivot_index == 3


def test_split_at_pivot_returns_three_segments():
    assert split_at_pivot("hello", 2) == ("he", "l", "lo")
    assert split_at_pivot("a", 0) == ("", "a", "")
    assert split_at_pivot("", 0) == ("", "", "")
