"""Tests for composite score, confidence adjustment and tiers."""

import pytest

from impact_profile.models import DimensionScores, ImpactTier, ProfileType
from impact_profile.scoring.composite import compute_adjusted_score, compute_composite, get_tier


class TestComputeComposite:
    def test_average_of_four(self):
        dims = DimensionScores(building=80, guarding=60, consistency=40, breadth=20)
        assert compute_composite(dims) == 50

    def test_rounds_half_up(self):
        dims = DimensionScores(building=2)
        assert compute_composite(dims) == 1

    def test_solo_excludes_guarding(self):
        dims = DimensionScores(building=80, guarding=99, consistency=40, breadth=30)
        assert compute_composite(dims, ProfileType.SOLO) == 50

    def test_solo_not_penalized_for_zero_guarding(self):
        dims = DimensionScores(building=60, guarding=0, consistency=60, breadth=60)
        assert compute_composite(dims, ProfileType.SOLO) == 60
        assert compute_composite(dims, ProfileType.COLLABORATIVE) == 45


class TestAdjustedScore:
    def test_full_confidence_unchanged(self):
        assert compute_adjusted_score(100, 100) == 100

    def test_zero_base_stays_zero(self):
        assert compute_adjusted_score(0, 50) == 0
        assert compute_adjusted_score(0, 100) == 0

    def test_floor_confidence_rounds_up(self):
        """100 * 0.925 = 92.5 rounds up to 93."""
        assert compute_adjusted_score(100, 50) == 93

    def test_partial_confidence(self):
        assert compute_adjusted_score(80, 100) == 80
        assert compute_adjusted_score(80, 0) == 68


class TestGetTier:
    @pytest.mark.parametrize(
        "score, tier",
        [
            (0, ImpactTier.EMERGING),
            (39, ImpactTier.EMERGING),
            (40, ImpactTier.SOLID),
            (69, ImpactTier.SOLID),
            (70, ImpactTier.HIGH),
            (84, ImpactTier.HIGH),
            (85, ImpactTier.ELITE),
            (100, ImpactTier.ELITE),
        ],
    )
    def test_boundaries_inclusive_low(self, score, tier):
        assert get_tier(score) is tier
