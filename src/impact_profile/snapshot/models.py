"""Data model for daily metrics snapshots: compact records of one scoring run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..models import ConfidenceFlag, DeveloperArchetype, ImpactTier, ProfileType

# Numeric StatsData fields carried into every snapshot, in diff order
SNAPSHOT_STAT_FIELDS: tuple[str, ...] = (
    "commits_total",
    "prs_merged_count",
    "prs_merged_weight",
    "reviews_submitted_count",
    "issues_closed_count",
    "repos_contributed",
    "active_days",
    "lines_added",
    "lines_deleted",
    "total_stars",
    "total_forks",
    "total_watchers",
    "top_repo_share",
)


@dataclass(frozen=True)
class SnapshotPenalty:
    """Compact penalty record; the reason string is looked up from the flag."""

    flag: ConfidenceFlag
    penalty: int


@dataclass(frozen=True)
class MetricsSnapshot:
    """One user's stats and impact scores for one calendar day.

    Keyed by ``(handle, date)``; the persistence layer keeps at most one
    per key. Bulky or mutable fields (heatmap, display name, avatar) are
    left out. Snapshots are never updated: a new day is a new snapshot.

    ``confidence_penalties`` is ``None`` when the run had no penalties, and
    also for records written before penalties were captured.
    """

    # ── Identity ──────────────────────────────────────────────────
    handle: str
    date: str  # YYYY-MM-DD (UTC)
    captured_at: str  # ISO-8601

    # ── Stats ─────────────────────────────────────────────────────
    commits_total: int
    prs_merged_count: int
    prs_merged_weight: float
    reviews_submitted_count: int
    issues_closed_count: int
    repos_contributed: int
    active_days: int
    lines_added: int
    lines_deleted: int
    total_stars: int
    total_forks: int
    total_watchers: int
    top_repo_share: float
    max_commits_in_10min: int

    # ── Impact ────────────────────────────────────────────────────
    building: int
    guarding: int
    consistency: int
    breadth: int
    archetype: DeveloperArchetype
    profile_type: ProfileType
    composite_score: int
    adjusted_composite: int
    confidence: int
    tier: ImpactTier

    # ── Optional ──────────────────────────────────────────────────
    micro_commit_ratio: Optional[float] = None
    docs_only_pr_ratio: Optional[float] = None
    confidence_penalties: Optional[tuple[SnapshotPenalty, ...]] = None
