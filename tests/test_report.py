# tests/test_report.py
import math

import pytest

from hunllef_core.models import FishSweepPoint, SimulationSummary
from hunllef_core.report import (
    REPORT_QUANTILES,
    format_summary,
    format_sweep,
    histogram_frame,
    quantile_table,
    sweep_frame,
    ticks_to_clock,
)


@pytest.mark.parametrize(
    "ticks, expected",
    [(0, "0:00"), (5, "0:03"), (100, "1:00"), (150, "1:30"), (333, "3:19")],
)
def test_ticks_to_clock(ticks, expected):
    assert ticks_to_clock(ticks) == expected


def test_quantile_table_reports_actual_samples():
    values = list(range(1, 1001))
    table = quantile_table(values)
    assert list(table["quantile"]) == list(REPORT_QUANTILES)
    assert table["value"].iloc[3] == 500
    assert set(table["value"]).issubset(set(values))
    assert list(table["value"]) == sorted(table["value"])


def test_quantile_table_empty():
    assert quantile_table([]).empty


def test_histogram_probabilities_sum_to_one():
    frame = histogram_frame([1, 2, 2, 3, 3, 3, 10], bins=4)
    assert len(frame) == 4
    assert math.isclose(frame["probability"].sum(), 1.0)
    assert frame["bin_start"].iloc[0] <= 1
    assert frame["bin_end"].iloc[-1] == 10


def test_histogram_single_value_and_empty():
    frame = histogram_frame([7, 7, 7])
    assert list(frame["probability"]) == [1.0]
    assert histogram_frame([]).empty


def test_summary_properties():
    summary = SimulationSummary(trials=4, successes=2, times=[300, 400], fish_eaten=[1, 2, 3, 6])
    assert summary.success_rate == 0.5
    assert summary.mean_time == 350
    assert summary.mean_fish_eaten == 3


def test_mean_time_without_successes_is_nan():
    summary = SimulationSummary(trials=2, successes=0, times=[], fish_eaten=[12, 12])
    assert math.isnan(summary.mean_time)


def test_format_summary_lines():
    summary = SimulationSummary(trials=4, successes=3, times=[300, 310, 320], fish_eaten=[1, 2, 3, 6])
    text = format_summary(summary)
    assert text.splitlines() == [
        "success rate: 75.00%",
        "avg fish eaten: 3.0",
        "avg time: 310.0 ticks",
    ]


def test_format_summary_with_histogram():
    summary = SimulationSummary(trials=3, successes=2, times=[300, 400], fish_eaten=[1, 2, 12])
    text = format_summary(summary, histogram=True)
    assert "Time (m:ss) - 2 samples" in text
    assert "Fish eaten - 3 samples (includes failures)" in text
    assert "50.0'th %: 3:00" in text


def test_sweep_helpers():
    points = [FishSweepPoint(fish=0, successes=1, trials=4), FishSweepPoint(fish=1, successes=4, trials=4)]
    frame = sweep_frame(points)
    assert list(frame["success_rate"]) == [0.25, 1.0]
    text = format_sweep(points, trials=4)
    assert text.splitlines()[0] == "food sweep - 4 trials per allotment"
    assert "  1 fish: 100.00%" in text
