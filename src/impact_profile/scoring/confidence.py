"""Confidence analysis: how clearly the data supports precise scoring.

Confidence starts at 100. Each detected pattern subtracts a fixed penalty
and the total is floored (50 by default), so no combination of patterns
can push it lower. Reason strings describe what was observed in neutral
terms and never imply intent.
"""

from __future__ import annotations

from typing import Callable, NamedTuple, Optional

from ..config import DEFAULT_SCORING, ScoringConfig
from ..models import ConfidenceFlag, ConfidencePenalty, ProfileType, StatsData

CONFIDENCE_REASONS: dict[ConfidenceFlag, str] = {
    ConfidenceFlag.BURST_ACTIVITY: (
        "Some activity appears in short bursts, which reduces timing confidence."
    ),
    ConfidenceFlag.MICRO_COMMIT_PATTERN: (
        "Many very small changes in this period reduce signal clarity."
    ),
    ConfidenceFlag.GENERATED_CHANGE_PATTERN: (
        "Large change volume with limited review signals reduces confidence."
    ),
    ConfidenceFlag.LOW_COLLABORATION_SIGNAL: (
        "Limited review and collaboration signals detected in this period."
    ),
    ConfidenceFlag.SINGLE_REPO_CONCENTRATION: (
        "Most activity is concentrated in one repo (not bad, just less cross-repo signal)."
    ),
    ConfidenceFlag.SUPPLEMENTAL_UNVERIFIED: (
        "Includes activity from a linked account that cannot be independently verified."
    ),
    ConfidenceFlag.LOW_ACTIVITY_SIGNAL: (
        "Limited activity in this period reduces how much the data can show."
    ),
    ConfidenceFlag.REVIEW_VOLUME_IMBALANCE: (
        "Review volume is high relative to merged changes, which reduces signal clarity."
    ),
}

# A solo developer's lack of review activity is expected, not a pattern
SOLO_SKIPPED_FLAGS = frozenset(
    {
        ConfidenceFlag.LOW_COLLABORATION_SIGNAL,
        ConfidenceFlag.GENERATED_CHANGE_PATTERN,
    }
)

EXTENDED_FLAGS = frozenset(
    {
        ConfidenceFlag.LOW_ACTIVITY_SIGNAL,
        ConfidenceFlag.REVIEW_VOLUME_IMBALANCE,
    }
)


class ConfidenceResult(NamedTuple):
    confidence: int
    penalties: list[ConfidencePenalty]


class _Rule(NamedTuple):
    flag: ConfidenceFlag
    penalty: Callable[[ScoringConfig], int]
    triggered: Callable[[StatsData, ScoringConfig], bool]


def _burst(stats: StatsData, c: ScoringConfig) -> bool:
    return stats.max_commits_in_10min >= c.burst_min_commits_10min


def _micro(stats: StatsData, c: ScoringConfig) -> bool:
    return stats.micro_commit_ratio is not None and stats.micro_commit_ratio >= c.micro_min_ratio


def _generated(stats: StatsData, c: ScoringConfig) -> bool:
    total_lines = stats.lines_added + stats.lines_deleted
    return total_lines >= c.generated_min_lines and stats.reviews_submitted_count <= c.generated_max_reviews


def _low_collab(stats: StatsData, c: ScoringConfig) -> bool:
    return (
        stats.prs_merged_count >= c.low_collab_min_prs
        and stats.reviews_submitted_count <= c.low_collab_max_reviews
    )


def _concentration(stats: StatsData, c: ScoringConfig) -> bool:
    return (
        stats.top_repo_share >= c.concentration_min_share
        and stats.repos_contributed <= c.concentration_max_repos
    )


def _supplemental(stats: StatsData, c: ScoringConfig) -> bool:
    return bool(stats.has_supplemental_data)


def _low_activity(stats: StatsData, c: ScoringConfig) -> bool:
    return (
        stats.active_days < c.low_activity_max_days
        and stats.commits_total < c.low_activity_max_commits
    )


def _review_imbalance(stats: StatsData, c: ScoringConfig) -> bool:
    return (
        stats.reviews_submitted_count >= c.review_imbalance_min_reviews
        and stats.prs_merged_count < c.review_imbalance_max_prs
    )


# Evaluation order is the order penalties appear in results
_RULES: tuple[_Rule, ...] = (
    _Rule(ConfidenceFlag.BURST_ACTIVITY, lambda c: c.burst_penalty, _burst),
    _Rule(ConfidenceFlag.MICRO_COMMIT_PATTERN, lambda c: c.micro_penalty, _micro),
    _Rule(ConfidenceFlag.GENERATED_CHANGE_PATTERN, lambda c: c.generated_penalty, _generated),
    _Rule(ConfidenceFlag.LOW_COLLABORATION_SIGNAL, lambda c: c.low_collab_penalty, _low_collab),
    _Rule(ConfidenceFlag.SINGLE_REPO_CONCENTRATION, lambda c: c.concentration_penalty, _concentration),
    _Rule(ConfidenceFlag.SUPPLEMENTAL_UNVERIFIED, lambda c: c.supplemental_penalty, _supplemental),
    _Rule(ConfidenceFlag.LOW_ACTIVITY_SIGNAL, lambda c: c.low_activity_penalty, _low_activity),
    _Rule(ConfidenceFlag.REVIEW_VOLUME_IMBALANCE, lambda c: c.review_imbalance_penalty, _review_imbalance),
)


def penalty_reason(flag: ConfidenceFlag) -> str:
    """Neutral explanation shown for ``flag``."""
    return CONFIDENCE_REASONS[flag]


def penalty_amount(flag: ConfidenceFlag, config: ScoringConfig = DEFAULT_SCORING) -> int:
    """Confidence points deducted when ``flag`` fires."""
    for rule in _RULES:
        if rule.flag is flag:
            return rule.penalty(config)
    raise KeyError(flag)


def compute_confidence(
    stats: StatsData,
    profile_type: Optional[ProfileType] = None,
    config: ScoringConfig = DEFAULT_SCORING,
) -> ConfidenceResult:
    """Detect signal-clarity patterns and derive a 50-100 confidence rating.

    Args:
        stats: Aggregated stats for one user
        profile_type: SOLO skips the review-related flags; None means
            collaborative rules apply
        config: Scoring configuration

    Returns:
        ConfidenceResult(confidence, penalties) with penalties in rule order
    """
    penalties: list[ConfidencePenalty] = []
    score = 100

    for rule in _RULES:
        if profile_type is ProfileType.SOLO and rule.flag in SOLO_SKIPPED_FLAGS:
            continue
        if rule.flag in EXTENDED_FLAGS and not config.extended_confidence_flags:
            continue
        if not rule.triggered(stats, config):
            continue

        amount = rule.penalty(config)
        penalties.append(
            ConfidencePenalty(flag=rule.flag, penalty=amount, reason=CONFIDENCE_REASONS[rule.flag])
        )
        score -= amount

    return ConfidenceResult(confidence=max(config.confidence_floor, score), penalties=penalties)
