"""Dimension scorers: Building, Guarding, Consistency, Breadth.

Each scorer is a weighted blend of normalized signals scaled to 0-100.
Scorers are independent of each other and return exactly 0 when their
primary signal is absent. Inputs are assumed validated and non-negative.
"""

from __future__ import annotations

import math

from ..config import DEFAULT_SCORING, ScoringConfig
from ..math.evenness import compute_heatmap_evenness
from ..math.normalize import clamp_score, normalize
from ..models import DimensionScores, StatsData


def compute_building(stats: StatsData, config: ScoringConfig = DEFAULT_SCORING) -> int:
    """Shipping meaningful changes: PR weight, closed issues, commits."""
    pr = normalize(stats.prs_merged_weight, config.cap_pr_weight)
    issues = normalize(stats.issues_closed_count, config.cap_issues)
    commits = normalize(stats.commits_total, config.cap_commits)

    raw = 100 * (
        config.building_pr_weight * pr
        + config.building_issues_weight * issues
        + config.building_commits_weight * commits
    )
    return clamp_score(raw)


def review_to_pr_ratio(stats: StatsData, config: ScoringConfig = DEFAULT_SCORING) -> float:
    """Reviews given per merged PR, capped and scaled to [0, 1].

    A reviewer with no merged PRs of their own gets the full ratio.
    """
    if stats.prs_merged_count > 0:
        ratio = stats.reviews_submitted_count / stats.prs_merged_count
        return min(ratio, config.cap_review_ratio) / config.cap_review_ratio
    return 1.0


def compute_guarding(stats: StatsData, config: ScoringConfig = DEFAULT_SCORING) -> int:
    """Reviewing and quality gatekeeping."""
    if stats.reviews_submitted_count == 0:
        return 0

    reviews = normalize(stats.reviews_submitted_count, config.cap_reviews)
    ratio = review_to_pr_ratio(stats, config)

    micro_ratio = stats.micro_commit_ratio
    if micro_ratio is None:
        micro_ratio = config.default_micro_commit_ratio
    inverse_micro = 1 - micro_ratio

    raw = 100 * (
        config.guarding_reviews_weight * reviews
        + config.guarding_ratio_weight * ratio
        + config.guarding_micro_weight * inverse_micro
    )
    return clamp_score(raw)


def compute_consistency(stats: StatsData, config: ScoringConfig = DEFAULT_SCORING) -> int:
    """Reliable, sustained contributions.

    The square root on active days makes the first weeks of consistency
    cheap to earn and the last weeks expensive.
    """
    if stats.active_days == 0:
        return 0

    streak = math.sqrt(min(stats.active_days, config.cap_active_days) / config.cap_active_days)
    evenness = compute_heatmap_evenness(stats.heatmap_data)
    inverse_burst = 1 - min(stats.max_commits_in_10min, config.cap_burst_commits) / config.cap_burst_commits

    raw = 100 * (
        config.consistency_days_weight * streak
        + config.consistency_evenness_weight * evenness
        + config.consistency_burst_weight * inverse_burst
    )
    return clamp_score(raw)


def compute_breadth(stats: StatsData, config: ScoringConfig = DEFAULT_SCORING) -> int:
    """Cross-project reach. Watchers are deliberately not a signal."""
    if stats.repos_contributed == 0:
        return 0

    repos = min(stats.repos_contributed, config.cap_repos) / config.cap_repos
    spread = 1 - stats.top_repo_share
    stars = normalize(stats.total_stars, config.cap_stars)
    forks = normalize(stats.total_forks, config.cap_forks)
    docs = stats.docs_only_pr_ratio if stats.docs_only_pr_ratio is not None else 0.0

    raw = 100 * (
        config.breadth_repos_weight * repos
        + config.breadth_spread_weight * spread
        + config.breadth_stars_weight * stars
        + config.breadth_forks_weight * forks
        + config.breadth_docs_weight * docs
    )
    return clamp_score(raw)


def compute_dimensions(stats: StatsData, config: ScoringConfig = DEFAULT_SCORING) -> DimensionScores:
    """Score all four dimensions."""
    return DimensionScores(
        building=compute_building(stats, config),
        guarding=compute_guarding(stats, config),
        consistency=compute_consistency(stats, config),
        breadth=compute_breadth(stats, config),
    )
