"""Impact scoring entry point: StatsData in, ImpactV4Result out.

Pipeline:
    dimensions -> archetype -> composite -> recency weight
    -> confidence adjustment -> tier

Every step is a pure function of the stats, the configuration and the
reference time, so scoring many users concurrently needs no coordination.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from ..config import DEFAULT_SCORING, ScoringConfig
from ..math.recency import apply_recency_weight, compute_recency_ratio
from ..models import ImpactV4Result, ProfileType, StatsData
from .archetype import derive_archetype
from .composite import compute_adjusted_score, compute_composite, get_tier
from .confidence import compute_confidence
from .dimensions import compute_dimensions

logger = logging.getLogger(__name__)


def detect_profile_type(stats: StatsData) -> ProfileType:
    """SOLO when no reviews were submitted, COLLABORATIVE otherwise."""
    if stats.reviews_submitted_count == 0:
        return ProfileType.SOLO
    return ProfileType.COLLABORATIVE


def compute_impact_v4(
    stats: StatsData,
    config: ScoringConfig = DEFAULT_SCORING,
    now: Optional[datetime] = None,
) -> ImpactV4Result:
    """Compute the full impact profile for one user.

    Args:
        stats: Validated 365-day aggregate
        config: Scoring configuration
        now: Reference instant for recency and ``computed_at``
            (defaults to the current UTC time)

    Returns:
        ImpactV4Result with dimensions, archetype, scores, confidence and tier
    """
    if now is None:
        now = datetime.now(timezone.utc)

    profile_type = detect_profile_type(stats)
    dimensions = compute_dimensions(stats, config)
    archetype = derive_archetype(dimensions, profile_type, config)
    composite = compute_composite(dimensions, profile_type)

    confidence = compute_confidence(stats, profile_type, config)
    recency_ratio = compute_recency_ratio(stats.heatmap_data, today=now.date(), config=config)
    recency_weighted = apply_recency_weight(composite, recency_ratio, config)
    adjusted = compute_adjusted_score(recency_weighted, confidence.confidence, config)
    tier = get_tier(adjusted, config)

    logger.debug(
        "Scored %s (%s): dims=%s composite=%d recency=%.3f confidence=%d adjusted=%d tier=%s",
        stats.handle,
        profile_type.value,
        dimensions.as_dict(),
        composite,
        recency_ratio,
        confidence.confidence,
        adjusted,
        tier.value,
    )

    return ImpactV4Result(
        handle=stats.handle,
        profile_type=profile_type,
        dimensions=dimensions,
        archetype=archetype,
        composite_score=composite,
        confidence=confidence.confidence,
        confidence_penalties=tuple(confidence.penalties),
        adjusted_composite=adjusted,
        tier=tier,
        computed_at=now.isoformat(),
    )
