"""
Impact Profile - Developer impact scoring and snapshot history

Turns a year of aggregated contribution statistics into four dimension
scores (building, guarding, consistency, breadth), an archetype, a
confidence estimate and a tier, and tracks how those change over time
through daily snapshots, diffs and trends.
"""

__version__ = "0.1.0"

from .config import DEFAULT_HISTORY, DEFAULT_SCORING, HistoryConfig, ScoringConfig, load_config
from .diff import compare_snapshots, explain_diff, is_significant_change
from .models import (
    ConfidenceFlag,
    DeveloperArchetype,
    DimensionScores,
    ImpactTier,
    ImpactV4Result,
    ProfileType,
    StatsData,
)
from .scoring import compute_impact_v4
from .snapshot import MetricsSnapshot, build_snapshot
from .temporal import compute_trend

__all__ = [
    "compute_impact_v4",  # Main entry point
    "build_snapshot",
    "compare_snapshots",
    "explain_diff",
    "is_significant_change",
    "compute_trend",
    "StatsData",
    "ImpactV4Result",
    "DimensionScores",
    "MetricsSnapshot",
    "ProfileType",
    "DeveloperArchetype",
    "ImpactTier",
    "ConfidenceFlag",
    "ScoringConfig",
    "HistoryConfig",
    "DEFAULT_SCORING",
    "DEFAULT_HISTORY",
    "load_config",
]
