"""Shared test fixtures for impact-profile tests."""

from datetime import date, timedelta

import pytest

from impact_profile.models import (
    DeveloperArchetype,
    HeatmapDay,
    ImpactTier,
    ProfileType,
    StatsData,
)
from impact_profile.snapshot.models import MetricsSnapshot

REFERENCE_DAY = date(2025, 6, 30)


def daily_heatmap(days: int, count: int = 1, end: date = REFERENCE_DAY) -> tuple:
    """``days`` consecutive days ending at ``end``, each with ``count`` events."""
    start = end - timedelta(days=days - 1)
    return tuple(
        HeatmapDay(date=(start + timedelta(days=i)).isoformat(), count=count) for i in range(days)
    )


@pytest.fixture
def make_stats():
    """Factory for StatsData with every counter zero unless overridden."""

    def _make(**kwargs) -> StatsData:
        defaults = {"handle": "octocat"}
        defaults.update(kwargs)
        return StatsData(**defaults)

    return _make


@pytest.fixture
def capped_stats(make_stats):
    """A profile that saturates every cap, active every day up to REFERENCE_DAY."""
    return make_stats(
        commits_total=600,
        prs_merged_count=36,
        prs_merged_weight=120.0,
        reviews_submitted_count=180,
        issues_closed_count=80,
        repos_contributed=15,
        active_days=365,
        total_stars=500,
        total_forks=200,
        top_repo_share=0.0,
        max_commits_in_10min=0,
        micro_commit_ratio=0.0,
        docs_only_pr_ratio=1.0,
        heatmap_data=daily_heatmap(364),
    )


@pytest.fixture
def make_snapshot():
    """Factory for MetricsSnapshot with neutral values unless overridden."""

    def _make(**kwargs) -> MetricsSnapshot:
        defaults = {
            "handle": "octocat",
            "date": "2025-06-14",
            "captured_at": "2025-06-14T06:00:00+00:00",
            "commits_total": 0,
            "prs_merged_count": 0,
            "prs_merged_weight": 0.0,
            "reviews_submitted_count": 0,
            "issues_closed_count": 0,
            "repos_contributed": 0,
            "active_days": 0,
            "lines_added": 0,
            "lines_deleted": 0,
            "total_stars": 0,
            "total_forks": 0,
            "total_watchers": 0,
            "top_repo_share": 0.0,
            "max_commits_in_10min": 0,
            "building": 0,
            "guarding": 0,
            "consistency": 0,
            "breadth": 0,
            "archetype": DeveloperArchetype.EMERGING,
            "profile_type": ProfileType.COLLABORATIVE,
            "composite_score": 0,
            "adjusted_composite": 0,
            "confidence": 100,
            "tier": ImpactTier.EMERGING,
        }
        defaults.update(kwargs)
        return MetricsSnapshot(**defaults)

    return _make


@pytest.fixture
def make_heatmap():
    """Factory for a run of consecutive heatmap days ending at REFERENCE_DAY."""
    return daily_heatmap
