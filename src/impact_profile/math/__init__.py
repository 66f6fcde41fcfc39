"""Numeric building blocks: normalization, heatmap statistics, recency, smoothing."""

from .evenness import compute_heatmap_evenness, weekly_totals
from .normalize import clamp_score, normalize, round_half_up
from .recency import apply_recency_weight, compute_recency_ratio, recency_multiplier
from .smoothing import apply_ema

__all__ = [
    "normalize",
    "clamp_score",
    "round_half_up",
    "compute_heatmap_evenness",
    "weekly_totals",
    "compute_recency_ratio",
    "recency_multiplier",
    "apply_recency_weight",
    "apply_ema",
]
