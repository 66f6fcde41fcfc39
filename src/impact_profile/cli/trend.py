"""Trend CLI command -- show how the score moves across recent snapshots."""

from pathlib import Path
from typing import Optional

import typer

from ..exceptions import ImpactProfileError
from ..formatters import get_formatter
from ..temporal import compute_trend
from . import app
from ._common import fail, load_history, not_enough_history, resolve_settings


@app.command()
def trend(
    history_file: Path = typer.Argument(
        ...,
        help="Snapshot history (JSON array or JSON lines)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    window: Optional[int] = typer.Option(
        None,
        "--window",
        "-w",
        help="Number of recent snapshots to include (default 7, clamped to 2..30)",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
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
) -> None:
    """
    Show the score trend with per-dimension sparklines.

    [bold cyan]Examples:[/bold cyan]

      impact-profile trend history.jsonl

      impact-profile trend history.jsonl --window 14 --json
    """
    try:
        settings = resolve_settings(config=config, verbose=verbose)
        snapshots = load_history(history_file)
    except ImpactProfileError as e:
        fail(e)

    summary = compute_trend(snapshots, window, settings.history)
    if summary is None:
        not_enough_history(json_output, len(snapshots))
        return

    get_formatter("json" if json_output else "rich").render_trend(summary)
