from rsvp_anchor.analytics import (
    build_heatmap,
    compute_analytics,
    normalize_intensity,
    round_half_up,
)
from rsvp_anchor.models import SessionSample


def _samples(*rates: int) -> list[SessionSample]:
    return [
        SessionSample(chunk_text=f"w{idx}", rate=rate, elapsed_millis=idx * 200)
        for idx, rate in enumerate(rates)
    ]


def test_compute_analytics_summarizes_series():
    analytics = compute_analytics(_samples(300, 310, 320))
    assert analytics is not None
    assert analytics.average_rate == 310
    assert analytics.peak_rate == 320
    assert analytics.total_elapsed_seconds == 0.4
    assert [s.normalized_intensity for s in analytics.samples] == [0.0, 0.5, 1.0]
    assert [s.text for s in analytics.samples] == ["w0", "w1", "w2"]


def test_flat_series_has_zero_intensity():
    heatmap = build_heatmap(_samples(300, 300, 300))
    assert all(cell.normalized_intensity == 0.0 for cell in heatmap)
    assert normalize_intensity(300, 300, 300) == 0.0


def test_empty_series_has_no_analytics():
    assert compute_analytics([]) is None
    assert build_heatmap([]) == []


def test_average_rounds_half_up():
    analytics = compute_analytics(_samples(300, 301))
    assert analytics is not None
    assert analytics.average_rate == 301
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4) == 2


def test_to_dict_is_json_ready():
    analytics = compute_analytics(_samples(300, 320))
    assert analytics is not None
    payload = analytics.to_dict()
    assert payload["peak_rate"] == 320
    assert payload["samples"][1] == {
        "text": "w1",
        "rate": 320,
        "normalized_intensity": 1.0,
    }
