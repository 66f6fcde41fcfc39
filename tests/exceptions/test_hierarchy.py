"""Tests for the impact-profile exception hierarchy."""

from pathlib import Path

import pytest

from impact_profile.exceptions import (
    ConfigFileError,
    ConfigurationError,
    ImpactProfileError,
    InvalidConfigError,
    InvalidStatsError,
    MissingDependencyError,
    SerializationError,
    SnapshotFormatError,
)


class TestImpactProfileError:
    def test_message_only(self):
        assert str(ImpactProfileError("boom")) == "boom"

    def test_details_appended(self):
        err = ImpactProfileError("boom", details={"key": "value", "n": "2"})
        assert str(err) == "boom (key=value, n=2)"
        assert err.details == {"key": "value", "n": "2"}


class TestHierarchy:
    @pytest.mark.parametrize(
        "err, parent",
        [
            (InvalidConfigError("scoring", {}, "bad"), ConfigurationError),
            (ConfigFileError(Path("x.toml"), "file not found"), ConfigurationError),
            (MissingDependencyError("tomli"), ConfigurationError),
            (InvalidStatsError("commitsTotal", "missing required field"), SerializationError),
            (SnapshotFormatError("bad"), SerializationError),
        ],
    )
    def test_all_derive_from_base(self, err, parent):
        assert isinstance(err, parent)
        assert isinstance(err, ImpactProfileError)


class TestErrorDetails:
    def test_invalid_config(self):
        err = InvalidConfigError("history.ema_alpha", 2.0, "out of range")
        assert err.key == "history.ema_alpha"
        assert "reason=out of range" in str(err)

    def test_invalid_stats_includes_value(self):
        err = InvalidStatsError("topRepoShare", "ratio must be between 0 and 1", 1.5)
        assert err.field == "topRepoShare"
        assert "value=1.5" in str(err)

    def test_snapshot_format_location(self):
        err = SnapshotFormatError("unknown tier 'X'", path=Path("h.json"), index=4)
        assert "path=h.json" in str(err)
        assert "index=4" in str(err)

    def test_missing_dependency_hint(self):
        err = MissingDependencyError("tomli", hint="pip install tomli")
        assert "hint=pip install tomli" in str(err)
