"""Rich terminal formatter for impact-profile."""

from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..diff.models import Direction, SignificanceResult, SnapshotDiff
from ..models import DIMENSION_KEYS, ImpactTier, ImpactV4Result, ProfileType
from ..temporal.models import TrendSummary
from .base import BaseFormatter

_TIER_STYLE = {
    ImpactTier.ELITE: "[magenta bold]Elite[/magenta bold]",
    ImpactTier.HIGH: "[green bold]High[/green bold]",
    ImpactTier.SOLID: "[cyan]Solid[/cyan]",
    ImpactTier.EMERGING: "[dim]Emerging[/dim]",
}

_DIRECTION_STYLE = {
    Direction.IMPROVING: "[green]improving ↑[/green]",
    Direction.DECLINING: "[red]declining ↓[/red]",
    Direction.STABLE: "[dim]stable →[/dim]",
}


def _score_bar(score: int, width: int = 20) -> str:
    filled = round(score / 100 * width)
    return "█" * filled + "[dim]" + "░" * (width - filled) + "[/dim]"


def _confidence_label(confidence: int) -> str:
    if confidence >= 90:
        return f"[green]{confidence}[/green]"
    elif confidence >= 70:
        return f"[yellow]{confidence}[/yellow]"
    else:
        return f"[red]{confidence}[/red]"


def _signed(delta: float, precision: int = 0) -> str:
    text = f"{delta:+.{precision}f}"
    if delta > 0:
        return f"[green]{text}[/green]"
    if delta < 0:
        return f"[red]{text}[/red]"
    return f"[dim]{text}[/dim]"


def sparkline(values: list) -> str:
    """Generate a block-character sparkline from numeric values."""
    if not values:
        return ""
    blocks = " ▁▂▃▄▅▆▇█"
    mn, mx = min(values), max(values)
    if mx == mn:
        return blocks[4] * len(values)
    return "".join(blocks[min(8, int((v - mn) / (mx - mn) * 8))] for v in values)


class RichFormatter(BaseFormatter):
    """Rich terminal output: summary panel plus detail tables."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render_result(self, result: ImpactV4Result) -> None:
        summary = (
            f"[bold]{escape(result.handle)}[/bold]  ·  {result.archetype.value}  ·  "
            f"{_TIER_STYLE[result.tier]}\n"
            f"Score [bold]{result.adjusted_composite}[/bold] "
            f"(composite {result.composite_score}, confidence "
            f"{_confidence_label(result.confidence)})"
        )
        self.console.print(
            Panel(summary, title="[bold cyan]Impact Profile[/bold cyan]", expand=False)
        )

        table = Table(title="Dimensions", expand=False)
        table.add_column("Dimension", style="bold")
        table.add_column("Score", justify="right")
        table.add_column("")
        for key in DIMENSION_KEYS:
            value = result.dimensions.get(key)
            if key == "guarding" and result.profile_type is ProfileType.SOLO:
                table.add_row(key.capitalize(), "[dim]n/a[/dim]", "[dim]solo profile[/dim]")
                continue
            table.add_row(key.capitalize(), str(value), _score_bar(value))
        self.console.print(table)

        if result.confidence_penalties:
            self.console.print()
            self.console.print("[bold]Confidence notes:[/bold]")
            for p in result.confidence_penalties:
                self.console.print(f"  [yellow]-{p.penalty}[/yellow] {p.reason}")

    def render_diff(
        self, diff: SnapshotDiff, significance: SignificanceResult, explanation: List[str]
    ) -> None:
        header = (
            f"{_DIRECTION_STYLE[diff.direction]} over {diff.days_between} day(s), "
            f"adjusted {_signed(diff.adjusted_composite)}"
        )
        self.console.print(Panel(header, title="[bold cyan]Snapshot Diff[/bold cyan]", expand=False))

        for line in explanation:
            self.console.print(f"  {line}")

        self.console.print()
        if significance.significant:
            reasons = ", ".join(r.value for r in significance.all_reasons)
            self.console.print(f"[bold green]Notification-worthy[/bold green] ({reasons})")
        else:
            self.console.print("[dim]Not significant[/dim]")

    def render_trend(self, trend: TrendSummary) -> None:
        header = (
            f"{_DIRECTION_STYLE[trend.direction]}  ·  avg step "
            f"{_signed(trend.avg_delta, 2)} over {len(trend.composite_values)} snapshot(s)"
        )
        self.console.print(Panel(header, title="[bold cyan]Trend[/bold cyan]", expand=False))

        table = Table(expand=False)
        table.add_column("Series", style="bold")
        table.add_column("Avg Δ", justify="right")
        table.add_column("Latest", justify="right")
        table.add_column("Sparkline")

        composite = [v.value for v in trend.composite_values]
        table.add_row(
            "Adjusted", _signed(trend.avg_delta, 2), str(composite[-1]), sparkline(composite)
        )
        smoothed = [v.value for v in trend.smoothed_values]
        table.add_row("Smoothed", "", str(smoothed[-1]), sparkline(smoothed))
        for key, dim in trend.dimensions.items():
            values = [v.value for v in dim.values]
            table.add_row(
                key.capitalize(), _signed(dim.avg_delta, 2), str(values[-1]), sparkline(values)
            )
        self.console.print(table)
