"""Score CLI command -- compute an impact profile from a stats file."""

from pathlib import Path
from typing import Optional

import typer

from ..exceptions import ImpactProfileError
from ..formatters import get_formatter
from ..scoring import compute_impact_v4
from ..serializers import append_snapshot, load_stats
from ..snapshot import build_snapshot
from . import app
from ._common import console, fail, resolve_settings


@app.command()
def score(
    stats_file: Path = typer.Argument(
        ...,
        help="Stats JSON document (camelCase keys)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    snapshot: Optional[Path] = typer.Option(
        None,
        "--snapshot",
        "-s",
        help="Append today's snapshot to this history file",
        dir_okay=False,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
) -> None:
    """
    Score one developer from an aggregated stats document.

    Prints the four dimensions, archetype, confidence notes and tier.

    [bold cyan]Examples:[/bold cyan]

      impact-profile score stats.json

      impact-profile score stats.json --json

      impact-profile score stats.json --snapshot history.jsonl
    """
    try:
        settings = resolve_settings(config=config, verbose=verbose, quiet=quiet)
        stats = load_stats(stats_file)
        result = compute_impact_v4(stats, settings.scoring)
        if snapshot is not None:
            append_snapshot(snapshot, build_snapshot(stats, result))
    except ImpactProfileError as e:
        fail(e)

    get_formatter("json" if json_output else "rich").render_result(result)

    if snapshot is not None and not json_output:
        console.print(f"[dim]Snapshot saved to {snapshot}[/dim]")
