"""JSON interchange for stats, results, snapshots, diffs and trends.

Persisted and exchanged documents use camelCase keys. This module is the
only place input documents are validated; everything downstream assumes
well-formed values.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional, TypeVar

from .diff.models import CategoricalChange, SignificanceResult, SnapshotDiff
from .exceptions import InvalidStatsError, SnapshotFormatError
from .models import (
    ConfidenceFlag,
    DeveloperArchetype,
    HeatmapDay,
    ImpactTier,
    ImpactV4Result,
    ProfileType,
    StatsData,
)
from .snapshot.models import SNAPSHOT_STAT_FIELDS, MetricsSnapshot, SnapshotPenalty
from .temporal.models import DateValue, TrendSummary

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

# snake_case attribute -> camelCase key, for every numeric stats field
STATS_KEYS: dict[str, str] = {
    "commits_total": "commitsTotal",
    "prs_merged_count": "prsMergedCount",
    "prs_merged_weight": "prsMergedWeight",
    "reviews_submitted_count": "reviewsSubmittedCount",
    "issues_closed_count": "issuesClosedCount",
    "lines_added": "linesAdded",
    "lines_deleted": "linesDeleted",
    "repos_contributed": "reposContributed",
    "active_days": "activeDays",
    "total_stars": "totalStars",
    "total_forks": "totalForks",
    "total_watchers": "totalWatchers",
    "top_repo_share": "topRepoShare",
    "max_commits_in_10min": "maxCommitsIn10Min",
}

_OPTIONAL_RATIO_KEYS: dict[str, str] = {
    "micro_commit_ratio": "microCommitRatio",
    "docs_only_pr_ratio": "docsOnlyPrRatio",
}

_RATIO_FIELDS = frozenset({"top_repo_share", "micro_commit_ratio", "docs_only_pr_ratio"})
_FLOAT_FIELDS = frozenset({"prs_merged_weight"}) | _RATIO_FIELDS

_IMPACT_KEYS: dict[str, str] = {
    "building": "building",
    "guarding": "guarding",
    "consistency": "consistency",
    "breadth": "breadth",
    "composite_score": "compositeScore",
    "adjusted_composite": "adjustedComposite",
    "confidence": "confidence",
}


# ── Validation helpers ───────────────────────────────────────────────


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _read_number(data: Mapping[str, Any], attr: str, key: str) -> float:
    if key not in data:
        raise InvalidStatsError(key, "missing required field")
    value = data[key]
    if not _is_number(value):
        raise InvalidStatsError(key, "expected a number", value)
    if value < 0:
        raise InvalidStatsError(key, "must be non-negative", value)
    if attr in _RATIO_FIELDS and value > 1:
        raise InvalidStatsError(key, "ratio must be between 0 and 1", value)
    if attr in _FLOAT_FIELDS:
        return float(value)
    if isinstance(value, float) and not value.is_integer():
        raise InvalidStatsError(key, "expected a whole number", value)
    return int(value)


def _is_iso_date(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def _read_heatmap(raw: Any) -> tuple[HeatmapDay, ...]:
    if not isinstance(raw, list):
        raise InvalidStatsError("heatmapData", "expected a list", raw)
    days: list[HeatmapDay] = []
    for i, entry in enumerate(raw):
        if not isinstance(entry, Mapping) or "date" not in entry or "count" not in entry:
            raise InvalidStatsError(f"heatmapData[{i}]", "expected {date, count}", entry)
        day = entry["date"]
        if not _is_iso_date(day):
            raise InvalidStatsError(f"heatmapData[{i}].date", "expected a YYYY-MM-DD date", day)
        count = entry["count"]
        if not _is_number(count) or count < 0:
            raise InvalidStatsError(f"heatmapData[{i}].count", "must be a non-negative number", count)
        if isinstance(count, float) and not count.is_integer():
            raise InvalidStatsError(f"heatmapData[{i}].count", "expected a whole number", count)
        days.append(HeatmapDay(date=day, count=int(count)))
    return tuple(days)


def _parse_enum(enum_cls: type[E], value: Any, key: str, index: Optional[int] = None) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        raise SnapshotFormatError(f"unknown {key} '{value}'", index=index)


# ── Stats ────────────────────────────────────────────────────────────


def stats_from_dict(data: Mapping[str, Any]) -> StatsData:
    """Build StatsData from a collaborator's camelCase JSON document.

    Raises:
        InvalidStatsError: On a missing, negative or non-numeric field
    """
    if not isinstance(data, Mapping):
        raise InvalidStatsError("<root>", "expected a JSON object")

    handle = data.get("handle")
    if not isinstance(handle, str) or not handle:
        raise InvalidStatsError("handle", "expected a non-empty string", handle)

    values: dict[str, Any] = {
        attr: _read_number(data, attr, key) for attr, key in STATS_KEYS.items()
    }

    for attr, key in _OPTIONAL_RATIO_KEYS.items():
        if data.get(key) is None:
            logger.debug("%s: %s absent, scorer default applies", handle, key)
            values[attr] = None
        else:
            values[attr] = _read_number(data, attr, key)

    if "heatmapData" in data:
        heatmap = _read_heatmap(data["heatmapData"])
    else:
        logger.debug("%s: heatmapData absent, using empty calendar", handle)
        heatmap = ()

    supplemental = data.get("hasSupplementalData", False)
    if supplemental is not None and not isinstance(supplemental, bool):
        raise InvalidStatsError("hasSupplementalData", "expected a boolean", supplemental)

    return StatsData(
        handle=handle,
        heatmap_data=heatmap,
        has_supplemental_data=bool(supplemental),
        display_name=data.get("displayName"),
        avatar_url=data.get("avatarUrl"),
        fetched_at=data.get("fetchedAt") or "",
        **values,
    )


def load_stats(path: Path) -> StatsData:
    """Read a stats JSON file."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InvalidStatsError("<root>", f"invalid JSON: {e}")
    return stats_from_dict(data)


# ── Impact results ───────────────────────────────────────────────────


def result_to_dict(result: ImpactV4Result) -> dict[str, Any]:
    return {
        "handle": result.handle,
        "profileType": result.profile_type.value,
        "dimensions": result.dimensions.as_dict(),
        "archetype": result.archetype.value,
        "compositeScore": result.composite_score,
        "confidence": result.confidence,
        "confidencePenalties": [
            {"flag": p.flag.value, "penalty": p.penalty, "reason": p.reason}
            for p in result.confidence_penalties
        ],
        "adjustedComposite": result.adjusted_composite,
        "tier": result.tier.value,
        "computedAt": result.computed_at,
    }


# ── Snapshots ────────────────────────────────────────────────────────


def snapshot_to_dict(snapshot: MetricsSnapshot) -> dict[str, Any]:
    """Compact camelCase form; absent optional fields are omitted."""
    data: dict[str, Any] = {
        "handle": snapshot.handle,
        "date": snapshot.date,
        "capturedAt": snapshot.captured_at,
    }
    for attr, key in STATS_KEYS.items():
        data[key] = getattr(snapshot, attr)
    for attr, key in _OPTIONAL_RATIO_KEYS.items():
        value = getattr(snapshot, attr)
        if value is not None:
            data[key] = value
    for attr, key in _IMPACT_KEYS.items():
        data[key] = getattr(snapshot, attr)
    data["archetype"] = snapshot.archetype.value
    data["profileType"] = snapshot.profile_type.value
    data["tier"] = snapshot.tier.value
    if snapshot.confidence_penalties is not None:
        data["confidencePenalties"] = [
            {"flag": p.flag.value, "penalty": p.penalty} for p in snapshot.confidence_penalties
        ]
    return data


def snapshot_from_dict(data: Mapping[str, Any], index: Optional[int] = None) -> MetricsSnapshot:
    """Parse a stored snapshot document.

    Raises:
        SnapshotFormatError: On missing keys, a malformed date, a
            non-numeric metric or an unknown enumeration label
    """
    if not isinstance(data, Mapping):
        raise SnapshotFormatError("expected a JSON object", index=index)

    required = ["handle", "date", "capturedAt", "archetype", "profileType", "tier"]
    required += list(STATS_KEYS.values()) + list(_IMPACT_KEYS.values())
    missing = [key for key in required if key not in data]
    if missing:
        raise SnapshotFormatError(f"missing keys: {', '.join(missing)}", index=index)

    if not isinstance(data["handle"], str) or not isinstance(data["capturedAt"], str):
        raise SnapshotFormatError("handle and capturedAt must be strings", index=index)
    if not _is_iso_date(data["date"]):
        raise SnapshotFormatError(f"date '{data['date']}' is not YYYY-MM-DD", index=index)

    non_numeric = [
        key
        for key in list(STATS_KEYS.values()) + list(_IMPACT_KEYS.values())
        if not _is_number(data[key])
    ]
    non_numeric += [
        key
        for key in _OPTIONAL_RATIO_KEYS.values()
        if data.get(key) is not None and not _is_number(data[key])
    ]
    if non_numeric:
        raise SnapshotFormatError(f"expected numbers for: {', '.join(non_numeric)}", index=index)

    penalties = None
    raw_penalties = data.get("confidencePenalties")
    if raw_penalties is not None:
        if not isinstance(raw_penalties, list):
            raise SnapshotFormatError("confidencePenalties must be a list", index=index)
        parsed: list[SnapshotPenalty] = []
        for p in raw_penalties:
            if not isinstance(p, Mapping) or not _is_number(p.get("penalty")):
                raise SnapshotFormatError("penalty entries need {flag, penalty}", index=index)
            parsed.append(
                SnapshotPenalty(
                    flag=_parse_enum(ConfidenceFlag, p.get("flag"), "confidence flag", index),
                    penalty=int(p["penalty"]),
                )
            )
        penalties = tuple(parsed)

    values: dict[str, Any] = {attr: data[key] for attr, key in STATS_KEYS.items()}
    values.update({attr: data[key] for attr, key in _IMPACT_KEYS.items()})
    values.update({attr: data.get(key) for attr, key in _OPTIONAL_RATIO_KEYS.items()})

    return MetricsSnapshot(
        handle=data["handle"],
        date=data["date"],
        captured_at=data["capturedAt"],
        archetype=_parse_enum(DeveloperArchetype, data["archetype"], "archetype", index),
        profile_type=_parse_enum(ProfileType, data["profileType"], "profile type", index),
        tier=_parse_enum(ImpactTier, data["tier"], "tier", index),
        confidence_penalties=penalties,
        **values,
    )


def load_snapshots(path: Path) -> list[MetricsSnapshot]:
    """Read snapshots from a JSON array file or a JSON-lines file.

    Order is preserved as stored; callers sort by date if needed.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8").strip()
    if not text:
        return []

    try:
        if text.startswith("["):
            documents = json.loads(text)
        else:
            documents = [json.loads(line) for line in text.splitlines() if line.strip()]
    except json.JSONDecodeError as e:
        raise SnapshotFormatError(f"invalid JSON: {e}", path=path)

    snapshots: list[MetricsSnapshot] = []
    for i, doc in enumerate(documents):
        try:
            snapshots.append(snapshot_from_dict(doc, index=i))
        except SnapshotFormatError as e:
            raise SnapshotFormatError(e.reason, path=path, index=i)
    return snapshots


def append_snapshot(path: Path, snapshot: MetricsSnapshot) -> None:
    """Add one snapshot to a history file, keeping the file's existing layout.

    A missing or empty file becomes JSON lines. A JSON-array file is
    rewritten as an array with the new snapshot at the end.
    """
    path = Path(path)
    document = snapshot_to_dict(snapshot)
    existing = path.read_text(encoding="utf-8").strip() if path.exists() else ""

    if existing.startswith("["):
        try:
            documents = json.loads(existing)
        except json.JSONDecodeError as e:
            raise SnapshotFormatError(f"invalid JSON: {e}", path=path)
        documents.append(document)
        path.write_text(json.dumps(documents, indent=2) + "\n", encoding="utf-8")
    else:
        with path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(document) + "\n")
    logger.debug("Appended snapshot for %s (%s) to %s", snapshot.handle, snapshot.date, path)


# ── Diffs, significance and trends ───────────────────────────────────


def _change_to_dict(change: Optional[CategoricalChange]) -> Optional[dict[str, str]]:
    if change is None:
        return None
    return {"from": change.from_.value, "to": change.to.value}


def diff_to_dict(diff: SnapshotDiff) -> dict[str, Any]:
    penalty_changes = None
    if diff.penalty_changes is not None:
        penalty_changes = {
            "added": [f.value for f in diff.penalty_changes.added],
            "removed": [f.value for f in diff.penalty_changes.removed],
        }
    return {
        "direction": diff.direction.value,
        "daysBetween": diff.days_between,
        "compositeScore": diff.composite_score,
        "adjustedComposite": diff.adjusted_composite,
        "confidence": diff.confidence,
        "dimensions": {
            key: diff.dimensions.get(key)
            for key in ("building", "guarding", "consistency", "breadth")
        },
        "stats": {STATS_KEYS[name]: diff.stats[name] for name in SNAPSHOT_STAT_FIELDS},
        "archetype": _change_to_dict(diff.archetype),
        "tier": _change_to_dict(diff.tier),
        "profileType": _change_to_dict(diff.profile_type),
        "penaltyChanges": penalty_changes,
    }


def significance_to_dict(result: SignificanceResult) -> dict[str, Any]:
    if not result.significant:
        return {"significant": False}
    return {
        "significant": True,
        "reason": result.reason.value,
        "allReasons": [r.value for r in result.all_reasons],
    }


def _series(values: tuple[DateValue, ...]) -> list[dict[str, Any]]:
    return [{"date": v.date, "value": v.value} for v in values]


def trend_to_dict(trend: TrendSummary) -> dict[str, Any]:
    return {
        "direction": trend.direction.value,
        "avgDelta": trend.avg_delta,
        "window": trend.window,
        "compositeValues": _series(trend.composite_values),
        "smoothedValues": _series(trend.smoothed_values),
        "dimensions": {
            key: {"avgDelta": dim.avg_delta, "values": _series(dim.values)}
            for key, dim in trend.dimensions.items()
        },
    }
