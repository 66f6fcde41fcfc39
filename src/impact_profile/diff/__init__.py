"""Snapshot diffing and significance detection."""

from .engine import classify_direction, compare_snapshots, explain_diff
from .models import (
    CategoricalChange,
    DimensionDeltas,
    Direction,
    PenaltyChanges,
    SignificanceResult,
    SignificantReason,
    SnapshotDiff,
)
from .significance import is_significant_change

__all__ = [
    "CategoricalChange",
    "DimensionDeltas",
    "Direction",
    "PenaltyChanges",
    "SignificanceResult",
    "SignificantReason",
    "SnapshotDiff",
    "classify_direction",
    "compare_snapshots",
    "explain_diff",
    "is_significant_change",
]
