"""Recency weighting: a gentle nudge toward recently active developers."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Sequence

from ..config import DEFAULT_SCORING, ScoringConfig
from ..models import HeatmapDay
from .normalize import clamp_score, round_half_up


def compute_recency_ratio(
    heatmap_data: Sequence[HeatmapDay],
    today: Optional[date] = None,
    config: ScoringConfig = DEFAULT_SCORING,
) -> float:
    """Fraction of total activity that falls in the recency window.

    Days on or after ``today - recency_window_days`` count as recent.
    An empty or all-zero heatmap returns the neutral ratio so missing data
    is neither rewarded nor penalized.

    Args:
        heatmap_data: Daily activity counts
        today: Reference day (defaults to the current UTC date)
        config: Scoring configuration

    Returns:
        Ratio in [0, 1]
    """
    if len(heatmap_data) == 0:
        return config.recency_neutral_ratio

    if today is None:
        today = datetime.now(timezone.utc).date()
    cutoff = today - timedelta(days=config.recency_window_days)

    total_activity = 0
    recent_activity = 0
    for day in heatmap_data:
        total_activity += day.count
        if date.fromisoformat(day.date[:10]) >= cutoff:
            recent_activity += day.count

    if total_activity == 0:
        return config.recency_neutral_ratio
    return recent_activity / total_activity


def recency_multiplier(recency_ratio: float, config: ScoringConfig = DEFAULT_SCORING) -> float:
    """Piecewise-linear multiplier pivoting at the neutral ratio.

    ratio 0.0 -> recency_min_multiplier, neutral -> 1.0,
    ratio 1.0 -> recency_max_multiplier.
    """
    neutral = config.recency_neutral_ratio
    if recency_ratio <= neutral:
        t = recency_ratio / neutral
        return config.recency_min_multiplier + t * (1.0 - config.recency_min_multiplier)
    t = (recency_ratio - neutral) / (1.0 - neutral)
    return 1.0 + t * (config.recency_max_multiplier - 1.0)


def apply_recency_weight(
    score: float, recency_ratio: float, config: ScoringConfig = DEFAULT_SCORING
) -> int:
    """Scale ``score`` by the recency multiplier, rounded and clamped to [0, 100]."""
    return clamp_score(round_half_up(score * recency_multiplier(recency_ratio, config)))
