"""Heatmap evenness: how uniformly activity spreads across weeks."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..models import HeatmapDay

DAYS_PER_WEEK = 7


def weekly_totals(heatmap_data: Sequence[HeatmapDay]) -> np.ndarray:
    """Sum daily counts into consecutive 7-day buckets.

    A trailing partial week forms its own bucket.
    """
    counts = np.fromiter((day.count for day in heatmap_data), dtype=float, count=len(heatmap_data))
    num_weeks = -(-counts.size // DAYS_PER_WEEK)
    padded = np.zeros(num_weeks * DAYS_PER_WEEK)
    padded[: counts.size] = counts
    return padded.reshape(num_weeks, DAYS_PER_WEEK).sum(axis=1)


def compute_heatmap_evenness(heatmap_data: Sequence[HeatmapDay]) -> float:
    """Inverse coefficient of variation of weekly activity totals.

    evenness = 1 / (1 + sigma / mu), with sigma the population standard
    deviation of weekly totals.

    - Perfectly uniform weeks: CV = 0, evenness = 1.0
    - A single-week burst: CV large, evenness near 0
    - No days or no activity: exactly 0.0

    The score depends only on the multiset of weekly totals, so moving the
    active week around does not change it.
    """
    if len(heatmap_data) == 0:
        return 0.0

    weeks = weekly_totals(heatmap_data)
    total = float(weeks.sum())
    if total <= 0:
        return 0.0

    mean = total / weeks.size
    std_dev = float(weeks.std())
    cv = std_dev / mean
    return 1.0 / (1.0 + cv)
