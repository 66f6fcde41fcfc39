"""Impact scoring: dimensions, confidence, archetype, composite and tier."""

from .archetype import ARCHETYPE_PRIORITY, derive_archetype
from .composite import compute_adjusted_score, compute_composite, get_tier
from .confidence import (
    CONFIDENCE_REASONS,
    ConfidenceResult,
    compute_confidence,
    penalty_amount,
    penalty_reason,
)
from .dimensions import (
    compute_breadth,
    compute_building,
    compute_consistency,
    compute_dimensions,
    compute_guarding,
)
from .engine import compute_impact_v4, detect_profile_type

__all__ = [
    "compute_impact_v4",
    "detect_profile_type",
    "compute_dimensions",
    "compute_building",
    "compute_guarding",
    "compute_consistency",
    "compute_breadth",
    "compute_confidence",
    "ConfidenceResult",
    "CONFIDENCE_REASONS",
    "penalty_reason",
    "penalty_amount",
    "derive_archetype",
    "ARCHETYPE_PRIORITY",
    "compute_composite",
    "compute_adjusted_score",
    "get_tier",
]
