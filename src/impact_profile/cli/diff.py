"""Diff CLI command -- compare the two most recent snapshots."""

from pathlib import Path
from typing import Optional

import typer

from ..diff import compare_snapshots, explain_diff, is_significant_change
from ..exceptions import ImpactProfileError
from ..formatters import get_formatter
from . import app
from ._common import fail, load_history, not_enough_history, resolve_settings


@app.command()
def diff(
    history_file: Path = typer.Argument(
        ...,
        help="Snapshot history (JSON array or JSON lines)",
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
    Show what changed between the two most recent snapshots.

    [bold cyan]Examples:[/bold cyan]

      impact-profile diff history.jsonl

      impact-profile diff history.jsonl --json
    """
    try:
        settings = resolve_settings(config=config, verbose=verbose)
        snapshots = load_history(history_file)
    except ImpactProfileError as e:
        fail(e)

    if len(snapshots) < 2:
        not_enough_history(json_output, len(snapshots))
        return

    result = compare_snapshots(snapshots[-2], snapshots[-1], settings.history)
    significance = is_significant_change(result, settings.history)
    explanation = explain_diff(result, settings.history)

    get_formatter("json" if json_output else "rich").render_diff(result, significance, explanation)
