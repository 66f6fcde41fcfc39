"""Shared CLI helpers."""

from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import ImpactSettings, load_config
from ..exceptions import ImpactProfileError
from ..logging_config import setup_logging
from ..serializers import load_snapshots
from ..snapshot import MetricsSnapshot

console = Console()


def resolve_settings(
    config: Optional[Path] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> ImpactSettings:
    """Build settings from CLI options and start logging accordingly."""
    settings = load_config(config_file=config, verbose=verbose, quiet=quiet)
    setup_logging(
        verbose=settings.verbosity == "verbose",
        quiet=settings.verbosity == "quiet",
        log_file=settings.log_file,
    )
    return settings


def load_history(path: Path) -> List[MetricsSnapshot]:
    """Load a snapshot history file, oldest snapshot first."""
    return sorted(load_snapshots(path), key=lambda s: (s.date, s.captured_at))


def fail(error: ImpactProfileError) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(str(error))}")
    raise typer.Exit(1)


def not_enough_history(json_output: bool, count: int) -> None:
    if json_output:
        print("null")
    else:
        console.print(
            f"[yellow]Need at least two snapshots, found {count}. "
            "Run 'impact-profile score --snapshot' on more days first.[/yellow]"
        )
