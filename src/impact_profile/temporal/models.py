"""Data models for score trends over a sequence of snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..diff.models import Direction


@dataclass(frozen=True)
class DateValue:
    date: str  # YYYY-MM-DD
    value: float


@dataclass(frozen=True)
class DimensionTrend:
    avg_delta: float
    values: tuple[DateValue, ...] = ()


@dataclass(frozen=True)
class TrendSummary:
    """Rolling-window view of how a user's scores move.

    ``avg_delta`` is the mean step between consecutive snapshots in the
    window; ``smoothed_values`` is the EMA of the adjusted composite series.
    """

    direction: Direction
    avg_delta: float
    window: int
    composite_values: tuple[DateValue, ...] = ()
    smoothed_values: tuple[DateValue, ...] = ()
    dimensions: dict[str, DimensionTrend] = field(default_factory=dict)
