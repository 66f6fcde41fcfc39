"""Data models for snapshot diffing: numeric deltas and categorical changes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Optional, TypeVar

from ..models import ConfidenceFlag, DeveloperArchetype, ImpactTier, ProfileType

T = TypeVar("T")


class Direction(Enum):
    """Movement of the adjusted composite score."""

    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class SignificantReason(Enum):
    """Why a change is worth telling the developer about, highest priority first."""

    TIER_CHANGE = "tier_change"
    ARCHETYPE_CHANGE = "archetype_change"
    SCORE_BUMP = "score_bump"


@dataclass(frozen=True)
class CategoricalChange(Generic[T]):
    """A label that differs between two snapshots."""

    from_: T
    to: T


@dataclass(frozen=True)
class PenaltyChanges:
    """Confidence flags that appeared or cleared between two snapshots."""

    added: tuple[ConfidenceFlag, ...] = ()
    removed: tuple[ConfidenceFlag, ...] = ()


@dataclass(frozen=True)
class DimensionDeltas:
    """Per-dimension change (current - previous); may be negative."""

    building: int = 0
    guarding: int = 0
    consistency: int = 0
    breadth: int = 0

    def get(self, key: str) -> int:
        return getattr(self, key)


@dataclass(frozen=True)
class SnapshotDiff:
    """Structured delta between two snapshots of the same user.

    Numeric fields hold ``current - previous``. Categorical fields are
    ``None`` when unchanged. ``penalty_changes`` is ``None`` when either
    snapshot carries no penalty data.
    """

    direction: Direction
    days_between: int

    composite_score: int
    adjusted_composite: int
    confidence: int

    dimensions: DimensionDeltas
    stats: dict[str, float] = field(default_factory=dict)

    archetype: Optional[CategoricalChange[DeveloperArchetype]] = None
    tier: Optional[CategoricalChange[ImpactTier]] = None
    profile_type: Optional[CategoricalChange[ProfileType]] = None

    penalty_changes: Optional[PenaltyChanges] = None


@dataclass(frozen=True)
class SignificanceResult:
    """Whether a diff should trigger an outward notification.

    ``reason`` is the highest-priority reason that fired; ``all_reasons``
    lists every reason that fired, in priority order.
    """

    significant: bool
    reason: Optional[SignificantReason] = None
    all_reasons: tuple[SignificantReason, ...] = ()
