"""Tests for recency ratio and recency multiplier."""

from datetime import date

import pytest

from impact_profile.config import ScoringConfig
from impact_profile.math.recency import (
    apply_recency_weight,
    compute_recency_ratio,
    recency_multiplier,
)
from impact_profile.models import HeatmapDay

TODAY = date(2025, 6, 30)  # 90-day cutoff is 2025-04-01


class TestRecencyRatio:
    def test_empty_heatmap_is_neutral(self):
        assert compute_recency_ratio([], today=TODAY) == 0.25

    def test_all_zero_heatmap_is_neutral(self):
        heatmap = [HeatmapDay("2025-06-01", 0), HeatmapDay("2025-01-01", 0)]
        assert compute_recency_ratio(heatmap, today=TODAY) == 0.25

    def test_cutoff_day_is_recent(self):
        heatmap = [HeatmapDay("2025-03-31", 1), HeatmapDay("2025-04-01", 1)]
        assert compute_recency_ratio(heatmap, today=TODAY) == 0.5

    def test_weighted_by_count(self):
        heatmap = [HeatmapDay("2025-01-01", 3), HeatmapDay("2025-06-29", 1)]
        assert compute_recency_ratio(heatmap, today=TODAY) == 0.25

    def test_all_recent(self):
        heatmap = [HeatmapDay("2025-06-01", 4), HeatmapDay("2025-06-30", 2)]
        assert compute_recency_ratio(heatmap, today=TODAY) == 1.0

    def test_neutral_ratio_follows_config(self):
        config = ScoringConfig(recency_neutral_ratio=0.4)
        assert compute_recency_ratio([], today=TODAY, config=config) == 0.4


class TestRecencyMultiplier:
    def test_zero_ratio_is_minimum(self):
        assert recency_multiplier(0.0) == pytest.approx(0.98)

    def test_neutral_ratio_is_one(self):
        assert recency_multiplier(0.25) == pytest.approx(1.0)

    def test_full_ratio_is_maximum(self):
        assert recency_multiplier(1.0) == pytest.approx(1.06)

    def test_monotone(self):
        ratios = [i / 20 for i in range(21)]
        values = [recency_multiplier(r) for r in ratios]
        assert values == sorted(values)


class TestApplyRecencyWeight:
    def test_boost(self):
        assert apply_recency_weight(50, 1.0) == 53

    def test_nudge_down(self):
        assert apply_recency_weight(50, 0.0) == 49

    def test_neutral_unchanged(self):
        assert apply_recency_weight(64, 0.25) == 64

    def test_clamped_to_hundred(self):
        assert apply_recency_weight(100, 1.0) == 100
