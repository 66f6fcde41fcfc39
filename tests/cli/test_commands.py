"""Tests for the impact-profile command-line interface."""

import json

import pytest
from typer.testing import CliRunner

from impact_profile import __version__
from impact_profile.cli import app
from impact_profile.models import ImpactTier
from impact_profile.serializers import load_snapshots, snapshot_to_dict

runner = CliRunner()

STATS_DOC = {
    "handle": "octocat",
    "commitsTotal": 420,
    "prsMergedCount": 30,
    "prsMergedWeight": 75.0,
    "reviewsSubmittedCount": 64,
    "issuesClosedCount": 20,
    "linesAdded": 18000,
    "linesDeleted": 6000,
    "reposContributed": 7,
    "activeDays": 210,
    "totalStars": 140,
    "totalForks": 22,
    "totalWatchers": 30,
    "topRepoShare": 0.45,
    "maxCommitsIn10Min": 6,
    "microCommitRatio": 0.25,
    "heatmapData": [{"date": "2025-06-01", "count": 4}, {"date": "2025-06-02", "count": 2}],
}


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("IMPACT_VERBOSITY", raising=False)
    monkeypatch.delenv("IMPACT_LOG_FILE", raising=False)


@pytest.fixture
def stats_file(tmp_path):
    path = tmp_path / "stats.json"
    path.write_text(json.dumps(STATS_DOC))
    return path


@pytest.fixture
def history_file(tmp_path, make_snapshot):
    """Two snapshots stored newest first."""
    path = tmp_path / "history.jsonl"
    snapshots = [
        make_snapshot(date="2025-06-15", adjusted_composite=75, tier=ImpactTier.HIGH),
        make_snapshot(date="2025-06-14", adjusted_composite=50, tier=ImpactTier.SOLID),
    ]
    path.write_text("\n".join(json.dumps(snapshot_to_dict(s)) for s in snapshots) + "\n")
    return path


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestScore:
    def test_json_output(self, stats_file):
        result = runner.invoke(app, ["score", str(stats_file), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["handle"] == "octocat"
        assert data["profileType"] == "collaborative"
        assert 0 <= data["adjustedComposite"] <= 100

    def test_rich_output(self, stats_file):
        result = runner.invoke(app, ["score", str(stats_file)])
        assert result.exit_code == 0
        assert "octocat" in result.stdout
        assert "Building" in result.stdout

    def test_snapshot_appended(self, stats_file, tmp_path):
        history = tmp_path / "history.jsonl"
        for _ in range(2):
            result = runner.invoke(app, ["score", str(stats_file), "--snapshot", str(history)])
            assert result.exit_code == 0

        snapshots = load_snapshots(history)
        assert len(snapshots) == 2
        assert snapshots[0].handle == "octocat"
        assert snapshots[0].commits_total == 420

    def test_invalid_stats(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"handle": "octocat", "commitsTotal": -3}))
        result = runner.invoke(app, ["score", str(path)])
        assert result.exit_code == 1
        assert "Invalid stats field" in result.stdout

    def test_malformed_heatmap_date(self, tmp_path):
        doc = dict(STATS_DOC, heatmapData=[{"date": "06/14/2025", "count": 2}])
        path = tmp_path / "bad_date.json"
        path.write_text(json.dumps(doc))
        result = runner.invoke(app, ["score", str(path)])
        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "heatmapData[0].date" in result.stdout

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["score", str(tmp_path / "nope.json")])
        assert result.exit_code != 0

    def test_config_file_applied(self, stats_file, tmp_path):
        config = tmp_path / "custom.toml"
        config.write_text("[scoring]\ntier_solid = 1\ntier_high = 2\ntier_elite = 3\n")
        result = runner.invoke(app, ["score", str(stats_file), "--json", "--config", str(config)])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["tier"] == "Elite"

    def test_invalid_config_file(self, stats_file, tmp_path):
        config = tmp_path / "custom.toml"
        config.write_text("[scoring]\ncap_bananas = 1\n")
        result = runner.invoke(app, ["score", str(stats_file), "--config", str(config)])
        assert result.exit_code == 1
        assert "Error" in result.stdout


class TestDiff:
    def test_sorted_before_diff(self, history_file):
        result = runner.invoke(app, ["diff", str(history_file), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["diff"]["direction"] == "improving"
        assert data["diff"]["tier"] == {"from": "Solid", "to": "High"}
        assert data["significance"]["reason"] == "tier_change"

    def test_rich_output(self, history_file):
        result = runner.invoke(app, ["diff", str(history_file)])
        assert result.exit_code == 0
        assert "Tier changed from Solid to High." in result.stdout

    def test_not_enough_history(self, tmp_path, make_snapshot):
        path = tmp_path / "one.jsonl"
        path.write_text(json.dumps(snapshot_to_dict(make_snapshot())) + "\n")
        result = runner.invoke(app, ["diff", str(path), "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) is None

    def test_malformed_history(self, tmp_path):
        path = tmp_path / "bad.jsonl"
        path.write_text("{\"handle\": \"octocat\"}\n")
        result = runner.invoke(app, ["diff", str(path)])
        assert result.exit_code == 1
        assert "Malformed snapshot data" in result.stdout

    def test_non_numeric_snapshot_value(self, tmp_path, make_snapshot):
        first = snapshot_to_dict(make_snapshot(date="2025-06-14"))
        second = snapshot_to_dict(make_snapshot(date="2025-06-15"))
        second["commitsTotal"] = "5"
        path = tmp_path / "history.jsonl"
        path.write_text(json.dumps(first) + "\n" + json.dumps(second) + "\n")
        result = runner.invoke(app, ["diff", str(path), "--json"])
        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "Malformed snapshot data" in result.stdout


class TestTrend:
    def test_json_output(self, history_file):
        result = runner.invoke(app, ["trend", str(history_file), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["direction"] == "improving"
        assert data["window"] == 7
        assert [v["date"] for v in data["compositeValues"]] == ["2025-06-14", "2025-06-15"]

    def test_window_option(self, history_file):
        result = runner.invoke(app, ["trend", str(history_file), "--window", "50", "--json"])
        assert json.loads(result.stdout)["window"] == 30

    def test_rich_output(self, history_file):
        result = runner.invoke(app, ["trend", str(history_file)])
        assert result.exit_code == 0
        assert "Smoothed" in result.stdout

    def test_not_enough_history(self, tmp_path):
        path = tmp_path / "empty.jsonl"
        path.write_text("")
        result = runner.invoke(app, ["trend", str(path)])
        assert result.exit_code == 0
        assert "Need at least two snapshots" in result.stdout
