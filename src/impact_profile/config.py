"""Configuration loading and management for impact-profile.

This module provides the scoring and history constants plus configuration
discovery. Configuration sources are merged in priority order:
    1. Defaults (defined in the dataclasses below)
    2. Global config (~/.impact-profile.toml)
    3. Project config (./impact-profile.toml)
    4. Explicit config file
    5. Environment variables (IMPACT_* prefix)
    6. Keyword overrides (typically CLI flags)

Example:
    >>> settings = load_config(verbose=True)
    >>> settings.verbosity
    'verbose'
    >>> settings.scoring.cap_pr_weight
    120.0
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigFileError, InvalidConfigError, MissingDependencyError

Verbosity = Literal["quiet", "normal", "verbose"]

_VERBOSITY_LEVELS = ("quiet", "normal", "verbose")


@dataclass(frozen=True)
class ScoringConfig:
    """Every calibration constant of the impact scoring pipeline.

    Recalibrating the model means changing values here; the scoring
    functions read nothing else.

    Attributes:
        Caps:
            cap_*: Value at which a log-normalized signal saturates to 1.0
            cap_repos / cap_active_days / cap_burst_commits: linear caps
            cap_review_ratio: reviews-per-merged-PR ratio that counts as full

        Dimension weights (per dimension, sum <= 1.0):
            building_*, guarding_*, consistency_*, breadth_*

        Archetype gates:
            emerging_max_avg: average below this is always Emerging
            emerging_min_peak: some dimension must reach this to leave Emerging
            balanced_max_range / balanced_min_avg: flat, strong profiles
            specialist_min: a leading dimension needs this for its archetype

        Confidence triggers:
            burst_*, micro_*, generated_*, low_collab_*, concentration_*,
            supplemental_penalty; low_activity_* and review_imbalance_* only
            apply when extended_confidence_flags is set

        Recency and scaling:
            recency_*: window and multiplier bounds of the recency nudge
            confidence_scale_floor / confidence_scale_span: the final score
                is multiplied by floor + span * confidence / 100

        Tiers:
            tier_solid / tier_high / tier_elite: inclusive lower bounds
    """

    # === Caps ===
    cap_pr_weight: float = 120.0
    cap_issues: float = 80.0
    cap_commits: float = 600.0
    cap_reviews: float = 180.0
    cap_stars: float = 500.0
    cap_forks: float = 200.0
    cap_repos: int = 15
    cap_active_days: int = 365
    cap_burst_commits: int = 30
    cap_review_ratio: float = 5.0

    # === Building ===
    building_pr_weight: float = 0.70
    building_issues_weight: float = 0.20
    building_commits_weight: float = 0.10

    # === Guarding ===
    guarding_reviews_weight: float = 0.60
    guarding_ratio_weight: float = 0.25
    guarding_micro_weight: float = 0.15
    # Unknown micro-commit data must not earn the full inverse bonus
    default_micro_commit_ratio: float = 0.30

    # === Consistency ===
    consistency_days_weight: float = 0.45
    consistency_evenness_weight: float = 0.40
    consistency_burst_weight: float = 0.15

    # === Breadth (watchers carry no weight) ===
    breadth_repos_weight: float = 0.40
    breadth_spread_weight: float = 0.25
    breadth_stars_weight: float = 0.10
    breadth_forks_weight: float = 0.05
    breadth_docs_weight: float = 0.15

    # === Archetype ===
    emerging_max_avg: float = 25.0
    emerging_min_peak: int = 40
    balanced_max_range: int = 20
    balanced_min_avg: float = 50.0
    specialist_min: int = 60

    # === Confidence ===
    confidence_floor: int = 50
    burst_min_commits_10min: int = 20
    burst_penalty: int = 15
    micro_min_ratio: float = 0.6
    micro_penalty: int = 10
    generated_min_lines: int = 20000
    generated_max_reviews: int = 2
    generated_penalty: int = 15
    low_collab_min_prs: int = 10
    low_collab_max_reviews: int = 1
    low_collab_penalty: int = 10
    concentration_min_share: float = 0.95
    concentration_max_repos: int = 1
    concentration_penalty: int = 5
    supplemental_penalty: int = 5
    extended_confidence_flags: bool = False
    low_activity_max_days: int = 30
    low_activity_max_commits: int = 50
    low_activity_penalty: int = 10
    review_imbalance_min_reviews: int = 50
    review_imbalance_max_prs: int = 3
    review_imbalance_penalty: int = 10

    # === Recency ===
    recency_window_days: int = 90
    recency_neutral_ratio: float = 0.25  # 90/365, proportional share
    recency_min_multiplier: float = 0.98
    recency_max_multiplier: float = 1.06

    # === Confidence scaling ===
    confidence_scale_floor: float = 0.85
    confidence_scale_span: float = 0.15

    # === Tiers ===
    tier_solid: int = 40
    tier_high: int = 70
    tier_elite: int = 85

    def __post_init__(self) -> None:
        """Validate scoring configuration."""
        cap_fields = [
            "cap_pr_weight",
            "cap_issues",
            "cap_commits",
            "cap_reviews",
            "cap_stars",
            "cap_forks",
            "cap_repos",
            "cap_active_days",
            "cap_burst_commits",
            "cap_review_ratio",
        ]
        for field_name in cap_fields:
            if getattr(self, field_name) <= 0:
                raise ValueError(f"{field_name} must be positive")

        weight_groups = {
            "building": ("building_pr_weight", "building_issues_weight", "building_commits_weight"),
            "guarding": ("guarding_reviews_weight", "guarding_ratio_weight", "guarding_micro_weight"),
            "consistency": (
                "consistency_days_weight",
                "consistency_evenness_weight",
                "consistency_burst_weight",
            ),
            "breadth": (
                "breadth_repos_weight",
                "breadth_spread_weight",
                "breadth_stars_weight",
                "breadth_forks_weight",
                "breadth_docs_weight",
            ),
        }
        for dimension, names in weight_groups.items():
            for field_name in names:
                if not 0.0 <= getattr(self, field_name) <= 1.0:
                    raise ValueError(f"{field_name} must be between 0.0 and 1.0")
            weight_sum = sum(getattr(self, name) for name in names)
            if weight_sum > 1.01:
                raise ValueError(
                    f"{dimension} weights must sum to at most 1.0, got {weight_sum:.3f}"
                )

        ratio_fields = [
            "default_micro_commit_ratio",
            "micro_min_ratio",
            "concentration_min_share",
            "recency_neutral_ratio",
        ]
        for field_name in ratio_fields:
            if not 0.0 <= getattr(self, field_name) <= 1.0:
                raise ValueError(f"{field_name} must be between 0.0 and 1.0")
        if not 0.0 < self.recency_neutral_ratio < 1.0:
            raise ValueError("recency_neutral_ratio must be strictly between 0.0 and 1.0")

        if not self.recency_min_multiplier <= 1.0 <= self.recency_max_multiplier:
            raise ValueError("recency multipliers must bracket 1.0")
        if self.recency_window_days < 1:
            raise ValueError("recency_window_days must be at least 1")

        if not 0 <= self.confidence_floor <= 100:
            raise ValueError("confidence_floor must be between 0 and 100")
        if abs(self.confidence_scale_floor + self.confidence_scale_span - 1.0) > 1e-9:
            raise ValueError("confidence_scale_floor + confidence_scale_span must equal 1.0")

        if not 0 < self.tier_solid < self.tier_high < self.tier_elite <= 100:
            raise ValueError("tier bounds must be strictly ascending within (0, 100]")


# Default scoring configuration (singleton)
DEFAULT_SCORING = ScoringConfig()


@dataclass(frozen=True)
class HistoryConfig:
    """Thresholds for snapshot diffing, trend lines and notifications.

    Attributes:
        diff_direction_threshold: |delta adjusted composite| above this is a move
        trend_direction_threshold: |average step delta| above this is a trend
        trend_default_window / trend_min_window / trend_max_window: snapshots
            considered by the trend engine
        explain_dimension_threshold: dimension deltas at or above this get a line
        score_bump_threshold: adjusted composite gain that counts as significant
        ema_alpha: smoothing factor of the exponential moving average
    """

    diff_direction_threshold: float = 2.0
    trend_direction_threshold: float = 1.0
    trend_default_window: int = 7
    trend_min_window: int = 2
    trend_max_window: int = 30
    explain_dimension_threshold: int = 5
    score_bump_threshold: int = 5
    ema_alpha: float = 0.15  # half-life ~4.3 days

    def __post_init__(self) -> None:
        """Validate history configuration."""
        if self.diff_direction_threshold < 0:
            raise ValueError("diff_direction_threshold must be non-negative")
        if self.trend_direction_threshold < 0:
            raise ValueError("trend_direction_threshold must be non-negative")
        if self.trend_min_window < 2:
            raise ValueError("trend_min_window must be at least 2")
        if not self.trend_min_window <= self.trend_default_window <= self.trend_max_window:
            raise ValueError("trend windows must satisfy min <= default <= max")
        if self.explain_dimension_threshold < 0:
            raise ValueError("explain_dimension_threshold must be non-negative")
        if self.score_bump_threshold < 1:
            raise ValueError("score_bump_threshold must be at least 1")
        if not 0.0 < self.ema_alpha <= 1.0:
            raise ValueError("ema_alpha must be in (0.0, 1.0]")


DEFAULT_HISTORY = HistoryConfig()


@dataclass(frozen=True)
class ImpactSettings:
    """Top-level settings: nested scoring/history configs plus output control."""

    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        if self.verbosity not in _VERBOSITY_LEVELS:
            raise ValueError(f"verbosity must be one of: {', '.join(_VERBOSITY_LEVELS)}")


_SECTIONS = {"scoring": ScoringConfig, "history": HistoryConfig}


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> ImpactSettings:
    """Load settings with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``verbose``
            and ``quiet`` booleans are translated to ``verbosity``.

    Returns:
        Validated ImpactSettings instance

    Raises:
        ConfigFileError: If a config file is unreadable or invalid
        InvalidConfigError: If a value fails validation
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".impact-profile.toml"
    if global_config.exists():
        _merge(merged, _load_toml_file(global_config))

    project_config = Path.cwd() / "impact-profile.toml"
    if project_config.exists():
        _merge(merged, _load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigFileError(config_file, "file not found")
        _merge(merged, _load_toml_file(config_file))

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    _merge(merged, overrides)

    for section, cls in _SECTIONS.items():
        value = merged.pop(section, None)
        if value is None:
            continue
        if isinstance(value, cls):
            merged[section] = value
        elif isinstance(value, dict):
            merged[section] = _build_section(section, cls, value)
        else:
            raise InvalidConfigError(section, value, "expected a table")

    unknown = set(merged) - {f.name for f in fields(ImpactSettings)}
    if unknown:
        key = sorted(unknown)[0]
        raise InvalidConfigError(key, merged[key], "unknown setting")

    try:
        return ImpactSettings(**merged)
    except ValueError as e:
        raise InvalidConfigError("verbosity", merged.get("verbosity"), str(e))


def _merge(target: dict[str, Any], source: dict[str, Any]) -> None:
    """Merge ``source`` into ``target``, combining section tables key by key."""
    for key, value in source.items():
        if key in _SECTIONS and isinstance(value, dict) and isinstance(target.get(key), dict):
            target[key] = {**target[key], **value}
        else:
            target[key] = value


def _build_section(section: str, cls: type, values: dict[str, Any]) -> Any:
    known = {f.name for f in fields(cls)}
    for key in values:
        if key not in known:
            raise InvalidConfigError(f"{section}.{key}", values[key], "unknown setting")
    try:
        return cls(**values)
    except ValueError as e:
        raise InvalidConfigError(section, values, str(e))


def _load_env_vars() -> dict[str, Any]:
    """Load top-level settings from IMPACT_* environment variables.

    Supported environment variables:
        IMPACT_VERBOSITY: quiet/normal/verbose
        IMPACT_LOG_FILE: path

    Returns:
        Dict of field_name -> parsed_value for any IMPACT_* vars found.
    """
    type_hints = get_type_hints(ImpactSettings)
    result: dict[str, Any] = {}

    for f in fields(ImpactSettings):
        if f.name in _SECTIONS:
            continue
        env_key = f"IMPACT_{f.name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        type_hint = type_hints.get(f.name)
        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[f.name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the annotated type."""
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]

    origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if origin is Literal:
        if value not in args:
            raise ValueError(f"expected one of {', '.join(args)}, got '{value}'")
        return value

    if type_hint is str:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load a TOML file and return the parsed dict.

    Raises:
        MissingDependencyError: If neither tomllib nor tomli is available
        ConfigFileError: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise MissingDependencyError(
                "tomli", hint="TOML support requires Python 3.11+ or 'pip install tomli'"
            )

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigFileError(path, str(e))
