"""Tests for snapshot diffing and diff explanations."""

import dataclasses

import pytest

from impact_profile.config import HistoryConfig
from impact_profile.diff import (
    CategoricalChange,
    Direction,
    classify_direction,
    compare_snapshots,
    explain_diff,
)
from impact_profile.models import (
    ConfidenceFlag,
    DeveloperArchetype,
    ImpactTier,
    ProfileType,
)
from impact_profile.snapshot import SnapshotPenalty


def _penalties(*flags):
    return tuple(SnapshotPenalty(flag=f, penalty=5) for f in flags)


class TestClassifyDirection:
    @pytest.mark.parametrize(
        "delta, expected",
        [
            (3, Direction.IMPROVING),
            (2.01, Direction.IMPROVING),
            (2, Direction.STABLE),
            (0, Direction.STABLE),
            (-2, Direction.STABLE),
            (-2.01, Direction.DECLINING),
            (-15, Direction.DECLINING),
        ],
    )
    def test_threshold_two_is_stable(self, delta, expected):
        assert classify_direction(delta, 2.0) is expected


class TestCompareSnapshots:
    def test_tier_upgrade_scenario(self, make_snapshot):
        previous = make_snapshot(date="2025-06-14", adjusted_composite=50, tier=ImpactTier.SOLID)
        current = make_snapshot(date="2025-06-15", adjusted_composite=75, tier=ImpactTier.HIGH)

        diff = compare_snapshots(previous, current)

        assert diff.direction is Direction.IMPROVING
        assert diff.days_between == 1
        assert diff.adjusted_composite == 25
        assert diff.tier == CategoricalChange(from_=ImpactTier.SOLID, to=ImpactTier.HIGH)
        assert diff.archetype is None
        assert diff.profile_type is None

    def test_delta_of_two_is_stable(self, make_snapshot):
        diff = compare_snapshots(
            make_snapshot(adjusted_composite=60), make_snapshot(adjusted_composite=62)
        )
        assert diff.direction is Direction.STABLE

    def test_delta_of_three_is_improving(self, make_snapshot):
        diff = compare_snapshots(
            make_snapshot(adjusted_composite=60), make_snapshot(adjusted_composite=63)
        )
        assert diff.direction is Direction.IMPROVING

    def test_declining(self, make_snapshot):
        diff = compare_snapshots(
            make_snapshot(adjusted_composite=60), make_snapshot(adjusted_composite=57)
        )
        assert diff.direction is Direction.DECLINING
        assert diff.adjusted_composite == -3

    def test_threshold_from_config(self, make_snapshot):
        config = HistoryConfig(diff_direction_threshold=5)
        diff = compare_snapshots(
            make_snapshot(adjusted_composite=60), make_snapshot(adjusted_composite=64), config
        )
        assert diff.direction is Direction.STABLE

    def test_numeric_deltas(self, make_snapshot):
        previous = make_snapshot(
            commits_total=100, top_repo_share=0.5, building=40, breadth=70, confidence=90
        )
        current = make_snapshot(
            commits_total=130, top_repo_share=0.25, building=55, breadth=60, confidence=100
        )
        diff = compare_snapshots(previous, current)

        assert diff.stats["commits_total"] == 30
        assert diff.stats["top_repo_share"] == pytest.approx(-0.25)
        assert diff.dimensions.building == 15
        assert diff.dimensions.breadth == -10
        assert diff.dimensions.guarding == 0
        assert diff.confidence == 10

    def test_categorical_changes(self, make_snapshot):
        previous = make_snapshot(
            archetype=DeveloperArchetype.BUILDER, profile_type=ProfileType.SOLO
        )
        current = make_snapshot(
            archetype=DeveloperArchetype.BALANCED, profile_type=ProfileType.COLLABORATIVE
        )
        diff = compare_snapshots(previous, current)

        assert diff.archetype.from_ is DeveloperArchetype.BUILDER
        assert diff.archetype.to is DeveloperArchetype.BALANCED
        assert diff.profile_type.to is ProfileType.COLLABORATIVE
        assert diff.tier is None

    def test_days_between_spans_months(self, make_snapshot):
        diff = compare_snapshots(make_snapshot(date="2025-05-30"), make_snapshot(date="2025-06-02"))
        assert diff.days_between == 3

    def test_inputs_unchanged(self, make_snapshot):
        previous = make_snapshot(adjusted_composite=10, building=20)
        current = make_snapshot(adjusted_composite=40, building=50)
        before = (dataclasses.asdict(previous), dataclasses.asdict(current))

        compare_snapshots(previous, current)

        assert (dataclasses.asdict(previous), dataclasses.asdict(current)) == before


class TestPenaltyChanges:
    def test_added_and_removed(self, make_snapshot):
        previous = make_snapshot(
            confidence_penalties=_penalties(
                ConfidenceFlag.BURST_ACTIVITY, ConfidenceFlag.SUPPLEMENTAL_UNVERIFIED
            )
        )
        current = make_snapshot(
            confidence_penalties=_penalties(
                ConfidenceFlag.SUPPLEMENTAL_UNVERIFIED, ConfidenceFlag.MICRO_COMMIT_PATTERN
            )
        )
        changes = compare_snapshots(previous, current).penalty_changes

        assert changes.added == (ConfidenceFlag.MICRO_COMMIT_PATTERN,)
        assert changes.removed == (ConfidenceFlag.BURST_ACTIVITY,)

    def test_none_when_either_side_lacks_penalties(self, make_snapshot):
        with_penalties = make_snapshot(
            confidence_penalties=_penalties(ConfidenceFlag.BURST_ACTIVITY)
        )
        without = make_snapshot()

        assert compare_snapshots(without, with_penalties).penalty_changes is None
        assert compare_snapshots(with_penalties, without).penalty_changes is None

    def test_identical_penalties_yield_empty_changes(self, make_snapshot):
        penalties = _penalties(ConfidenceFlag.BURST_ACTIVITY)
        diff = compare_snapshots(
            make_snapshot(confidence_penalties=penalties),
            make_snapshot(confidence_penalties=penalties),
        )
        assert diff.penalty_changes.added == ()
        assert diff.penalty_changes.removed == ()


class TestExplainDiff:
    def test_stable_summary_only(self, make_snapshot):
        lines = explain_diff(compare_snapshots(make_snapshot(), make_snapshot()))
        assert lines == ["Score is stable, no significant change detected."]

    def test_improving_with_tier_and_archetype(self, make_snapshot):
        previous = make_snapshot(
            adjusted_composite=60,
            tier=ImpactTier.SOLID,
            archetype=DeveloperArchetype.BUILDER,
            building=70,
            guarding=40,
        )
        current = make_snapshot(
            adjusted_composite=72,
            tier=ImpactTier.HIGH,
            archetype=DeveloperArchetype.BALANCED,
            building=74,
            guarding=52,
        )
        lines = explain_diff(compare_snapshots(previous, current))

        assert lines == [
            "Score is improving: adjusted composite changed by +12.0 points.",
            "Tier changed from Solid to High.",
            "Archetype shifted from Builder to Balanced.",
            "Guarding +12 points.",
        ]

    def test_declining_dimension_line(self, make_snapshot):
        previous = make_snapshot(adjusted_composite=70, consistency=80)
        current = make_snapshot(adjusted_composite=64, consistency=75)
        lines = explain_diff(compare_snapshots(previous, current))

        assert lines[0] == "Score is declining: adjusted composite changed by -6.0 points."
        assert "Consistency -5 points." in lines

    def test_penalty_lines(self, make_snapshot):
        previous = make_snapshot(confidence_penalties=_penalties(ConfidenceFlag.BURST_ACTIVITY))
        current = make_snapshot(
            confidence_penalties=_penalties(ConfidenceFlag.SINGLE_REPO_CONCENTRATION)
        )
        lines = explain_diff(compare_snapshots(previous, current))

        assert "New confidence penalty: single_repo_concentration." in lines
        assert "Confidence penalty resolved: burst_activity." in lines
