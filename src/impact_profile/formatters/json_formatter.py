"""JSON formatter for impact-profile."""

import json
from typing import Any, List

from ..diff.models import SignificanceResult, SnapshotDiff
from ..models import ImpactV4Result
from ..serializers import diff_to_dict, result_to_dict, significance_to_dict, trend_to_dict
from ..temporal.models import TrendSummary
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Print camelCase JSON documents to stdout."""

    def _emit(self, data: Any) -> None:
        print(json.dumps(data, indent=2))

    def render_result(self, result: ImpactV4Result) -> None:
        self._emit(result_to_dict(result))

    def render_diff(
        self, diff: SnapshotDiff, significance: SignificanceResult, explanation: List[str]
    ) -> None:
        self._emit(
            {
                "diff": diff_to_dict(diff),
                "significance": significance_to_dict(significance),
                "explanation": explanation,
            }
        )

    def render_trend(self, trend: TrendSummary) -> None:
        self._emit(trend_to_dict(trend))
