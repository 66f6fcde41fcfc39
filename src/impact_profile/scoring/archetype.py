"""Archetype classification from the shape of a dimension profile."""

from __future__ import annotations

from ..config import DEFAULT_SCORING, ScoringConfig
from ..models import DeveloperArchetype, DimensionScores, ProfileType, dimension_keys_for

# Tie-break priority, highest first. The first dimension that is both the
# profile maximum and above the specialist gate wins.
ARCHETYPE_PRIORITY: tuple[tuple[str, DeveloperArchetype], ...] = (
    ("breadth", DeveloperArchetype.POLYMATH),
    ("guarding", DeveloperArchetype.GUARDIAN),
    ("consistency", DeveloperArchetype.MARATHONER),
    ("building", DeveloperArchetype.BUILDER),
)


def derive_archetype(
    dimensions: DimensionScores,
    profile_type: ProfileType = ProfileType.COLLABORATIVE,
    config: ScoringConfig = DEFAULT_SCORING,
) -> DeveloperArchetype:
    """Map a dimension vector to one of six archetype labels.

    Rules, in order:
      1. avg below ``emerging_max_avg`` or no dimension at ``emerging_min_peak``: Emerging
      2. range within ``balanced_max_range`` and avg at ``balanced_min_avg``: Balanced
      3. first of Polymath > Guardian > Marathoner > Builder whose dimension
         is the maximum and at least ``specialist_min``
      4. otherwise Emerging

    Solo profiles are classified over building, consistency and breadth
    only, so Guardian can never be assigned to them.
    """
    keys = dimension_keys_for(profile_type)
    values = [dimensions.get(key) for key in keys]

    avg = sum(values) / len(values)
    peak = max(values)
    spread = peak - min(values)

    if avg < config.emerging_max_avg or peak < config.emerging_min_peak:
        return DeveloperArchetype.EMERGING

    if spread <= config.balanced_max_range and avg >= config.balanced_min_avg:
        return DeveloperArchetype.BALANCED

    for key, archetype in ARCHETYPE_PRIORITY:
        if key not in keys:
            continue
        value = dimensions.get(key)
        if value == peak and value >= config.specialist_min:
            return archetype

    return DeveloperArchetype.EMERGING
