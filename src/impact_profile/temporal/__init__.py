"""Score trends over snapshot history."""

from .models import DateValue, DimensionTrend, TrendSummary
from .trend import average_delta, clamp_window, compute_trend, smooth_series

__all__ = [
    "DateValue",
    "DimensionTrend",
    "TrendSummary",
    "average_delta",
    "clamp_window",
    "compute_trend",
    "smooth_series",
]
