"""Summaries of simulation results for the CLI and the dashboard."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final, Optional

import numpy as np
import pandas as pd

from .models import FishSweepPoint, SimulationSummary

REPORT_QUANTILES: Final[tuple[float, ...]] = (0.005, 0.025, 0.167, 0.50, 0.83, 0.975, 0.995)


def ticks_to_clock(ticks: int) -> str:
    """Format a tick count as ``m:ss`` (one tick is 0.6 seconds)."""

    minutes = ticks // 100
    seconds = ticks * 3 // 5 % 60
    return f"{minutes}:{seconds:02d}"


def quantile_table(
    values: Sequence[int],
    quantiles: Sequence[float] = REPORT_QUANTILES,
) -> pd.DataFrame:
    """Return observed values at the requested quantiles.

    Uses the ``lower`` method so every reported value is an actual sample.
    """

    if len(values) == 0:
        return pd.DataFrame({"quantile": pd.Series(dtype=float), "value": pd.Series(dtype=int)})
    samples = np.asarray(values, dtype=np.int64)
    levels = np.asarray(quantiles, dtype=float)
    picked = np.quantile(samples, levels, method="lower")
    return pd.DataFrame({"quantile": levels, "value": picked.astype(np.int64)})


def histogram_frame(values: Sequence[int], bins: int = 20) -> pd.DataFrame:
    """Bucket values into equal-width bins and return per-bin probabilities."""

    columns = ["bin_start", "bin_end", "probability"]
    if len(values) == 0:
        return pd.DataFrame(columns=columns)

    series = pd.Series(values, dtype=float)
    low, high = float(series.min()), float(series.max())
    if low == high:
        return pd.DataFrame({"bin_start": [low], "bin_end": [high], "probability": [1.0]})

    edges = np.linspace(low, high, bins + 1, dtype=float)
    categories = pd.cut(series, bins=edges, include_lowest=True, right=True)
    intervals = categories.cat.categories
    counts = categories.value_counts().reindex(intervals, fill_value=0)
    total = counts.sum()
    return pd.DataFrame(
        {
            "bin_start": [interval.left for interval in counts.index],
            "bin_end": [interval.right for interval in counts.index],
            "probability": counts.values / total,
        }
    )


def _format_quantiles(title: str, table: pd.DataFrame, as_clock: bool) -> list[str]:
    lines = [title]
    for quantile, value in zip(table["quantile"], table["value"]):
        label = f"{quantile * 100:.1f}'th %"
        shown = ticks_to_clock(int(value)) if as_clock else str(int(value))
        lines.append(f"{label:>10}: {shown}")
    return lines


def format_summary(summary: SimulationSummary, histogram: bool = False) -> str:
    """Render the text report printed by the command line tool."""

    lines = [
        f"success rate: {summary.success_rate * 100:.2f}%",
        f"avg fish eaten: {summary.mean_fish_eaten:.1f}",
        f"avg time: {summary.mean_time:.1f} ticks",
    ]
    if histogram:
        lines.append("")
        lines.append("Histograms")
        lines.extend(
            _format_quantiles(
                f"Time (m:ss) - {len(summary.times)} samples",
                quantile_table(summary.times),
                as_clock=True,
            )
        )
        lines.append("")
        lines.extend(
            _format_quantiles(
                f"Fish eaten - {len(summary.fish_eaten)} samples (includes failures)",
                quantile_table(summary.fish_eaten),
                as_clock=False,
            )
        )
    return "\n".join(lines)


def sweep_frame(points: Sequence[FishSweepPoint]) -> pd.DataFrame:
    """Return the food sweep as a table of fish, successes and success rate."""

    return pd.DataFrame(
        {
            "fish": [point.fish for point in points],
            "successes": [point.successes for point in points],
            "success_rate": [point.success_rate for point in points],
        }
    )


def format_sweep(points: Sequence[FishSweepPoint], trials: Optional[int] = None) -> str:
    """Render the food sweep as one line per allotment."""

    lines = []
    if trials is not None:
        lines.append(f"food sweep - {trials} trials per allotment")
    for point in points:
        lines.append(f"{point.fish:>3} fish: {point.success_rate * 100:6.2f}%")
    return "\n".join(lines)
