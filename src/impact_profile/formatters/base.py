"""Base formatter interface for impact-profile output rendering."""

from abc import ABC, abstractmethod
from typing import List

from ..diff.models import SignificanceResult, SnapshotDiff
from ..models import ImpactV4Result
from ..temporal.models import TrendSummary


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render_result(self, result: ImpactV4Result) -> None:
        """Render one impact profile."""

    @abstractmethod
    def render_diff(
        self, diff: SnapshotDiff, significance: SignificanceResult, explanation: List[str]
    ) -> None:
        """Render a snapshot diff with its explanation lines."""

    @abstractmethod
    def render_trend(self, trend: TrendSummary) -> None:
        """Render a trend summary."""
