"""Capture a MetricsSnapshot from a stats aggregate and its impact result."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from ..models import ImpactV4Result, StatsData
from .models import MetricsSnapshot, SnapshotPenalty

logger = logging.getLogger(__name__)


def build_snapshot(
    stats: StatsData,
    impact: ImpactV4Result,
    now: Optional[datetime] = None,
) -> MetricsSnapshot:
    """Project ``stats`` and ``impact`` into a compact daily snapshot.

    Parameters
    ----------
    stats:
        The aggregate the impact result was computed from.
    impact:
        The result of ``compute_impact_v4`` for the same stats.
    now:
        Capture instant; defaults to the current UTC time. ``date`` is its
        UTC calendar day.

    Returns
    -------
    MetricsSnapshot
        A value for the caller to persist. Nothing is written here.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    now_utc = now.astimezone(timezone.utc)

    penalties = None
    if impact.confidence_penalties:
        penalties = tuple(
            SnapshotPenalty(flag=p.flag, penalty=p.penalty) for p in impact.confidence_penalties
        )

    snapshot = MetricsSnapshot(
        handle=impact.handle,
        date=now_utc.date().isoformat(),
        captured_at=now_utc.isoformat(),
        commits_total=stats.commits_total,
        prs_merged_count=stats.prs_merged_count,
        prs_merged_weight=stats.prs_merged_weight,
        reviews_submitted_count=stats.reviews_submitted_count,
        issues_closed_count=stats.issues_closed_count,
        repos_contributed=stats.repos_contributed,
        active_days=stats.active_days,
        lines_added=stats.lines_added,
        lines_deleted=stats.lines_deleted,
        total_stars=stats.total_stars,
        total_forks=stats.total_forks,
        total_watchers=stats.total_watchers,
        top_repo_share=stats.top_repo_share,
        max_commits_in_10min=stats.max_commits_in_10min,
        micro_commit_ratio=stats.micro_commit_ratio,
        docs_only_pr_ratio=stats.docs_only_pr_ratio,
        building=impact.dimensions.building,
        guarding=impact.dimensions.guarding,
        consistency=impact.dimensions.consistency,
        breadth=impact.dimensions.breadth,
        archetype=impact.archetype,
        profile_type=impact.profile_type,
        composite_score=impact.composite_score,
        adjusted_composite=impact.adjusted_composite,
        confidence=impact.confidence,
        tier=impact.tier,
        confidence_penalties=penalties,
    )
    logger.debug("Captured snapshot for %s on %s", snapshot.handle, snapshot.date)
    return snapshot
