"""Daily metrics snapshots."""

from .capture import build_snapshot
from .models import SNAPSHOT_STAT_FIELDS, MetricsSnapshot, SnapshotPenalty

__all__ = [
    "MetricsSnapshot",
    "SnapshotPenalty",
    "SNAPSHOT_STAT_FIELDS",
    "build_snapshot",
]
