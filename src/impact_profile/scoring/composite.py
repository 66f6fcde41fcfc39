"""Composite score, confidence adjustment and tier banding."""

from __future__ import annotations

from ..config import DEFAULT_SCORING, ScoringConfig
from ..math.normalize import round_half_up
from ..models import DimensionScores, ImpactTier, ProfileType, dimension_keys_for


def compute_composite(
    dimensions: DimensionScores, profile_type: ProfileType = ProfileType.COLLABORATIVE
) -> int:
    """Rounded average of the dimensions that apply to the profile.

    Solo profiles average three dimensions; guarding is left out rather
    than counted as zero.
    """
    keys = dimension_keys_for(profile_type)
    return round_half_up(sum(dimensions.get(key) for key in keys) / len(keys))


def compute_adjusted_score(
    base: float, confidence: float, config: ScoringConfig = DEFAULT_SCORING
) -> int:
    """Scale ``base`` by confidence: base * (0.85 + 0.15 * confidence / 100).

    Full confidence leaves the score unchanged; the 50 floor costs at most
    7.5%. Result is rounded half-up and clamped to [0, 100].
    """
    adjusted = base * (config.confidence_scale_floor + config.confidence_scale_span * (confidence / 100))
    return round_half_up(max(0.0, min(100.0, adjusted)))


def get_tier(adjusted_score: float, config: ScoringConfig = DEFAULT_SCORING) -> ImpactTier:
    """Band the final score. Lower bounds are inclusive."""
    if adjusted_score >= config.tier_elite:
        return ImpactTier.ELITE
    if adjusted_score >= config.tier_high:
        return ImpactTier.HIGH
    if adjusted_score >= config.tier_solid:
        return ImpactTier.SOLID
    return ImpactTier.EMERGING
