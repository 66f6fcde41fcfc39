"""Tests for impact_profile.math.normalize."""

import math

import pytest

from impact_profile.math.normalize import clamp_score, normalize, round_half_up


class TestNormalize:
    """Logarithmic normalization into [0, 1]."""

    def test_zero_is_zero(self):
        assert normalize(0, 120) == 0.0

    def test_negative_is_zero(self):
        assert normalize(-5, 120) == 0.0

    def test_at_cap_is_one(self):
        assert normalize(120, 120) == pytest.approx(1.0)

    def test_flat_beyond_cap(self):
        assert normalize(10_000, 120) == normalize(120, 120)

    def test_matches_log_formula(self):
        assert normalize(10, 80) == pytest.approx(math.log(11) / math.log(81))

    def test_non_decreasing(self):
        values = [normalize(x, 600) for x in range(0, 700, 25)]
        assert values == sorted(values)

    @pytest.mark.parametrize("x", [0, 0.5, 1, 7, 59.9, 60, 61, 1e9])
    def test_in_unit_interval(self, x):
        assert 0.0 <= normalize(x, 60) <= 1.0

    def test_early_units_count_most(self):
        """The first 10 units are worth more than the next 10."""
        first = normalize(10, 100) - normalize(0, 100)
        second = normalize(20, 100) - normalize(10, 100)
        assert first > second


class TestRoundHalfUp:
    """Halves round toward positive infinity, unlike Python's round()."""

    def test_half_rounds_up(self):
        assert round_half_up(92.5) == 93
        assert round_half_up(0.5) == 1

    def test_below_half_rounds_down(self):
        assert round_half_up(92.49) == 92

    def test_negative_half_rounds_toward_positive(self):
        assert round_half_up(-2.5) == -2

    def test_returns_int(self):
        assert isinstance(round_half_up(3.7), int)


class TestClampScore:
    """Rounding and clamping into [0, 100]."""

    def test_clamps_high(self):
        assert clamp_score(140.2) == 100

    def test_clamps_low(self):
        assert clamp_score(-3) == 0

    def test_rounds(self):
        assert clamp_score(55.5) == 56

    @pytest.mark.parametrize("raw", [-10, 0, 12.4, 50.5, 99.99, 1000])
    def test_idempotent(self, raw):
        once = clamp_score(raw)
        assert clamp_score(once) == once
        assert 0 <= once <= 100
