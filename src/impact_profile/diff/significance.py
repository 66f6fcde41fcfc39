"""Significance detection: does a diff deserve a notification?

Trigger priority (highest first):
  1. Tier change (e.g. Solid -> High)
  2. Archetype change (e.g. Balanced -> Builder)
  3. Adjusted composite gain of at least ``score_bump_threshold``
"""

from __future__ import annotations

from ..config import DEFAULT_HISTORY, HistoryConfig
from .models import SignificanceResult, SignificantReason, SnapshotDiff


def is_significant_change(
    diff: SnapshotDiff, config: HistoryConfig = DEFAULT_HISTORY
) -> SignificanceResult:
    """Classify ``diff`` as notification-worthy or not."""
    reasons: list[SignificantReason] = []

    if diff.tier is not None:
        reasons.append(SignificantReason.TIER_CHANGE)

    if diff.archetype is not None:
        reasons.append(SignificantReason.ARCHETYPE_CHANGE)

    # Only gains count; a drop is never announced
    if diff.adjusted_composite >= config.score_bump_threshold:
        reasons.append(SignificantReason.SCORE_BUMP)

    if not reasons:
        return SignificanceResult(significant=False)

    return SignificanceResult(significant=True, reason=reasons[0], all_reasons=tuple(reasons))
