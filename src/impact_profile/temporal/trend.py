"""Trend engine: rolling average deltas over an ordered snapshot sequence.

Snapshots must already be sorted ascending by date; nothing is reordered
here.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

from ..config import DEFAULT_HISTORY, HistoryConfig
from ..diff.engine import classify_direction
from ..math.smoothing import apply_ema
from ..models import DIMENSION_KEYS
from ..snapshot.models import MetricsSnapshot
from .models import DateValue, DimensionTrend, TrendSummary

logger = logging.getLogger(__name__)


def clamp_window(window: Optional[int], config: HistoryConfig = DEFAULT_HISTORY) -> int:
    """Requested window bounded to [trend_min_window, trend_max_window]."""
    if window is None:
        window = config.trend_default_window
    return min(config.trend_max_window, max(config.trend_min_window, window))


def average_delta(values: Sequence[float]) -> float:
    """Mean of consecutive differences; 0.0 for fewer than two values."""
    if len(values) < 2:
        return 0.0
    return float(np.diff(np.asarray(values, dtype=float)).mean())


def smooth_series(values: Sequence[DateValue], alpha: float) -> tuple[DateValue, ...]:
    """Chain the EMA through ``values``; the first value passes through."""
    smoothed: list[DateValue] = []
    previous: Optional[float] = None
    for point in values:
        current = apply_ema(point.value, previous, alpha)
        smoothed.append(DateValue(date=point.date, value=current))
        previous = current
    return tuple(smoothed)


def _dimension_trend(snapshots: Sequence[MetricsSnapshot], key: str) -> DimensionTrend:
    values = tuple(DateValue(date=s.date, value=getattr(s, key)) for s in snapshots)
    return DimensionTrend(avg_delta=average_delta([v.value for v in values]), values=values)


def compute_trend(
    snapshots: Sequence[MetricsSnapshot],
    window: Optional[int] = None,
    config: HistoryConfig = DEFAULT_HISTORY,
) -> Optional[TrendSummary]:
    """Summarize the last ``window`` snapshots.

    Args:
        snapshots: Snapshots sorted ascending by date
        window: Number of trailing snapshots to consider (default 7,
            clamped to [2, 30])
        config: History thresholds

    Returns:
        TrendSummary, or None when fewer than two snapshots are given
    """
    if len(snapshots) < 2:
        return None

    w = clamp_window(window, config)
    recent = list(snapshots[-w:])

    composite_values = tuple(DateValue(date=s.date, value=s.adjusted_composite) for s in recent)
    avg = average_delta([v.value for v in composite_values])

    logger.debug(
        "Trend over %d of %d snapshots (window=%d): avg_delta=%.2f",
        len(recent),
        len(snapshots),
        w,
        avg,
    )

    return TrendSummary(
        direction=classify_direction(avg, config.trend_direction_threshold),
        avg_delta=avg,
        window=w,
        composite_values=composite_values,
        smoothed_values=smooth_series(composite_values, config.ema_alpha),
        dimensions={key: _dimension_trend(recent, key) for key in DIMENSION_KEYS},
    )
