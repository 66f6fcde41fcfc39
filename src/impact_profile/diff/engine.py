"""Diff engine: structured deltas between two MetricsSnapshots.

Snapshots are compared field by field:
  1. Direction from the adjusted composite delta.
  2. Numeric deltas for scores, dimensions and carried stats.
  3. Categorical changes for archetype, tier and profile type.
  4. Added/removed confidence flags, when both snapshots carry them.

Inputs are never modified.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from ..config import DEFAULT_HISTORY, HistoryConfig
from ..models import DIMENSION_KEYS
from ..snapshot.models import SNAPSHOT_STAT_FIELDS, MetricsSnapshot
from .models import (
    CategoricalChange,
    DimensionDeltas,
    Direction,
    PenaltyChanges,
    SnapshotDiff,
)

DIMENSION_LABELS: dict[str, str] = {
    "building": "Building",
    "guarding": "Guarding",
    "consistency": "Consistency",
    "breadth": "Breadth",
}


def classify_direction(delta: float, threshold: float) -> Direction:
    """IMPROVING above ``threshold``, DECLINING below ``-threshold``, else STABLE.

    A delta exactly at the threshold is STABLE.
    """
    if delta > threshold:
        return Direction.IMPROVING
    if delta < -threshold:
        return Direction.DECLINING
    return Direction.STABLE


def _days_between(previous: str, current: str) -> int:
    return (date.fromisoformat(current) - date.fromisoformat(previous)).days


def _categorical(old, new) -> Optional[CategoricalChange]:
    if old is new or old == new:
        return None
    return CategoricalChange(from_=old, to=new)


def _diff_penalties(
    previous: MetricsSnapshot, current: MetricsSnapshot
) -> Optional[PenaltyChanges]:
    """Flags added and removed, in the order they appear in each snapshot."""
    if previous.confidence_penalties is None or current.confidence_penalties is None:
        return None

    prev_flags = [p.flag for p in previous.confidence_penalties]
    curr_flags = [p.flag for p in current.confidence_penalties]
    prev_set = set(prev_flags)
    curr_set = set(curr_flags)

    added = tuple(dict.fromkeys(f for f in curr_flags if f not in prev_set))
    removed = tuple(dict.fromkeys(f for f in prev_flags if f not in curr_set))
    return PenaltyChanges(added=added, removed=removed)


def compare_snapshots(
    previous: MetricsSnapshot,
    current: MetricsSnapshot,
    config: HistoryConfig = DEFAULT_HISTORY,
) -> SnapshotDiff:
    """Compute a structured diff between two snapshots.

    Args:
        previous: The earlier snapshot.
        current: The later snapshot.
        config: History thresholds (direction threshold defaults to 2).

    Returns:
        A SnapshotDiff with direction, day gap, numeric deltas,
        categorical changes and penalty changes.
    """
    adjusted_delta = current.adjusted_composite - previous.adjusted_composite

    dimensions = DimensionDeltas(
        **{key: getattr(current, key) - getattr(previous, key) for key in DIMENSION_KEYS}
    )
    stats = {
        name: getattr(current, name) - getattr(previous, name) for name in SNAPSHOT_STAT_FIELDS
    }

    return SnapshotDiff(
        direction=classify_direction(adjusted_delta, config.diff_direction_threshold),
        days_between=_days_between(previous.date, current.date),
        composite_score=current.composite_score - previous.composite_score,
        adjusted_composite=adjusted_delta,
        confidence=current.confidence - previous.confidence,
        dimensions=dimensions,
        stats=stats,
        archetype=_categorical(previous.archetype, current.archetype),
        tier=_categorical(previous.tier, current.tier),
        profile_type=_categorical(previous.profile_type, current.profile_type),
        penalty_changes=_diff_penalties(previous, current),
    )


def explain_diff(diff: SnapshotDiff, config: HistoryConfig = DEFAULT_HISTORY) -> list[str]:
    """Human-readable explanation lines for a diff.

    Always starts with a direction summary, then tier and archetype
    changes, dimensions that moved by at least
    ``explain_dimension_threshold`` points, and one line per added or
    removed confidence flag.
    """
    lines: list[str] = []

    if diff.direction is Direction.IMPROVING:
        lines.append(
            f"Score is improving: adjusted composite changed by "
            f"+{diff.adjusted_composite:.1f} points."
        )
    elif diff.direction is Direction.DECLINING:
        lines.append(
            f"Score is declining: adjusted composite changed by "
            f"{diff.adjusted_composite:.1f} points."
        )
    else:
        lines.append("Score is stable, no significant change detected.")

    if diff.tier is not None:
        lines.append(f"Tier changed from {diff.tier.from_.value} to {diff.tier.to.value}.")

    if diff.archetype is not None:
        lines.append(
            f"Archetype shifted from {diff.archetype.from_.value} to {diff.archetype.to.value}."
        )

    for key, label in DIMENSION_LABELS.items():
        delta = diff.dimensions.get(key)
        if abs(delta) >= config.explain_dimension_threshold:
            sign = "+" if delta > 0 else ""
            lines.append(f"{label} {sign}{delta} points.")

    if diff.penalty_changes is not None:
        for flag in diff.penalty_changes.added:
            lines.append(f"New confidence penalty: {flag.value}.")
        for flag in diff.penalty_changes.removed:
            lines.append(f"Confidence penalty resolved: {flag.value}.")

    return lines
