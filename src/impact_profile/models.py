"""Data models for impact scoring: inputs, dimension scores, results.

All enumerations are closed: scoring code matches on members, never on
free-form strings. String values are the labels used in persisted JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ProfileType(Enum):
    """Whether the developer gives code review at all.

    SOLO           zero reviews submitted; guarding is not scored.
    COLLABORATIVE  at least one review submitted.
    """

    SOLO = "solo"
    COLLABORATIVE = "collaborative"


class DeveloperArchetype(Enum):
    """Shape of a dimension profile, independent of its magnitude."""

    BUILDER = "Builder"
    GUARDIAN = "Guardian"
    MARATHONER = "Marathoner"
    POLYMATH = "Polymath"
    BALANCED = "Balanced"
    EMERGING = "Emerging"


class ImpactTier(Enum):
    """Band of the final adjusted composite score."""

    EMERGING = "Emerging"
    SOLID = "Solid"
    HIGH = "High"
    ELITE = "Elite"


class ConfidenceFlag(Enum):
    """Patterns that reduce how clearly the data supports precise scoring."""

    BURST_ACTIVITY = "burst_activity"
    MICRO_COMMIT_PATTERN = "micro_commit_pattern"
    GENERATED_CHANGE_PATTERN = "generated_change_pattern"
    LOW_COLLABORATION_SIGNAL = "low_collaboration_signal"
    SINGLE_REPO_CONCENTRATION = "single_repo_concentration"
    SUPPLEMENTAL_UNVERIFIED = "supplemental_unverified"
    # Only applied when ScoringConfig.extended_confidence_flags is set
    LOW_ACTIVITY_SIGNAL = "low_activity_signal"
    REVIEW_VOLUME_IMBALANCE = "review_volume_imbalance"


DIMENSION_KEYS: tuple[str, ...] = ("building", "guarding", "consistency", "breadth")

# Guarding is excluded entirely for solo profiles, not scored as zero
SOLO_DIMENSION_KEYS: tuple[str, ...] = ("building", "consistency", "breadth")


def dimension_keys_for(profile_type: ProfileType) -> tuple[str, ...]:
    """Dimensions that participate in averages and archetypes for a profile."""
    if profile_type is ProfileType.SOLO:
        return SOLO_DIMENSION_KEYS
    return DIMENSION_KEYS


@dataclass(frozen=True)
class HeatmapDay:
    """Activity count for one calendar day."""

    date: str  # YYYY-MM-DD
    count: int


@dataclass(frozen=True)
class StatsData:
    """Aggregated contribution statistics for one user over 365 days.

    Produced by an external collaborator from GitHub data (optionally merged
    with a supplemental account). Never mutated by the scoring engine.
    """

    handle: str

    # ── Raw counters ──────────────────────────────────────────────
    commits_total: int = 0
    prs_merged_count: int = 0
    prs_merged_weight: float = 0.0
    reviews_submitted_count: int = 0
    issues_closed_count: int = 0
    lines_added: int = 0
    lines_deleted: int = 0
    repos_contributed: int = 0
    active_days: int = 0
    total_stars: int = 0
    total_forks: int = 0
    total_watchers: int = 0

    # ── Derived ratios ────────────────────────────────────────────
    top_repo_share: float = 0.0
    max_commits_in_10min: int = 0
    micro_commit_ratio: Optional[float] = None
    docs_only_pr_ratio: Optional[float] = None

    # ── Activity calendar, oldest day first ───────────────────────
    heatmap_data: tuple[HeatmapDay, ...] = ()

    has_supplemental_data: bool = False

    # ── Display fields (never snapshotted) ────────────────────────
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    fetched_at: str = ""  # ISO-8601

    def __post_init__(self) -> None:
        if not isinstance(self.heatmap_data, tuple):
            object.__setattr__(self, "heatmap_data", tuple(self.heatmap_data))


@dataclass(frozen=True)
class DimensionScores:
    """Four independent 0-100 sub-scores."""

    building: int = 0
    guarding: int = 0
    consistency: int = 0
    breadth: int = 0

    def get(self, key: str) -> int:
        return getattr(self, key)

    def as_dict(self) -> dict[str, int]:
        return {key: getattr(self, key) for key in DIMENSION_KEYS}


@dataclass(frozen=True)
class ConfidencePenalty:
    """One additive reduction to confidence with a neutral explanation."""

    flag: ConfidenceFlag
    penalty: int
    reason: str


@dataclass(frozen=True)
class ImpactV4Result:
    """Full output of the impact scoring engine for one user.

    ``composite_score`` is the plain average of the applicable dimensions;
    ``adjusted_composite`` is the published score after recency weighting
    and confidence scaling. ``tier`` always follows ``adjusted_composite``.
    """

    handle: str
    profile_type: ProfileType
    dimensions: DimensionScores
    archetype: DeveloperArchetype
    composite_score: int
    confidence: int
    adjusted_composite: int
    tier: ImpactTier
    computed_at: str  # ISO-8601
    confidence_penalties: tuple[ConfidencePenalty, ...] = field(default_factory=tuple)
