"""Tests for heatmap evenness (inverse coefficient of variation)."""

import pytest

from impact_profile.math.evenness import compute_heatmap_evenness, weekly_totals
from impact_profile.models import HeatmapDay


def _days(counts):
    return [HeatmapDay(date=f"2025-01-{i + 1:02d}", count=c) for i, c in enumerate(counts)]


class TestWeeklyTotals:
    def test_full_weeks(self):
        totals = weekly_totals(_days([1] * 14))
        assert totals.tolist() == [7.0, 7.0]

    def test_trailing_partial_week_is_own_bucket(self):
        totals = weekly_totals(_days([1] * 8))
        assert totals.tolist() == [7.0, 1.0]


class TestHeatmapEvenness:
    """Evenness = 1 / (1 + CV) of weekly totals."""

    def test_empty_is_zero(self):
        assert compute_heatmap_evenness([]) == 0.0

    def test_all_zero_is_zero(self):
        assert compute_heatmap_evenness(_days([0] * 21)) == 0.0

    def test_uniform_weeks_are_perfectly_even(self):
        assert compute_heatmap_evenness(_days([2] * 28)) == pytest.approx(1.0)

    def test_single_active_week_of_two(self):
        """Weekly totals [7, 0]: mean 3.5, std 3.5, CV 1."""
        assert compute_heatmap_evenness(_days([1] * 7 + [0] * 7)) == pytest.approx(0.5)

    def test_position_of_burst_does_not_matter(self):
        early = compute_heatmap_evenness(_days([5] * 7 + [0] * 21))
        late = compute_heatmap_evenness(_days([0] * 21 + [5] * 7))
        assert early == pytest.approx(late)

    def test_partial_week_included(self):
        """Weekly totals [7, 1]: mean 4, std 3, CV 0.75."""
        assert compute_heatmap_evenness(_days([1] * 8)) == pytest.approx(1 / 1.75)

    def test_burstier_is_less_even(self):
        steady = compute_heatmap_evenness(_days([3] * 7 + [2] * 7 + [3] * 7))
        bursty = compute_heatmap_evenness(_days([8] * 7 + [0] * 14))
        assert steady > bursty
