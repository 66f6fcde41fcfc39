"""Exponential moving average for damping day-to-day score swings."""

from __future__ import annotations

from typing import Optional

from ..config import DEFAULT_HISTORY
from .normalize import clamp_score, round_half_up


def apply_ema(
    current_score: float,
    previous_smoothed: Optional[float] = None,
    alpha: float = DEFAULT_HISTORY.ema_alpha,
) -> int:
    """Blend today's score with yesterday's smoothed score.

    smoothed = alpha * current + (1 - alpha) * previous

    With alpha = 0.15 a 10-point drop shows up as roughly 1.5 points per
    day. Without a previous value the current score passes through.
    """
    if previous_smoothed is None:
        return round_half_up(current_score)
    smoothed = alpha * current_score + (1 - alpha) * previous_smoothed
    return clamp_score(smoothed)
