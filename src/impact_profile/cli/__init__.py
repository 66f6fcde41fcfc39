"""CLI entry point — registers all subcommands."""

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="impact-profile",
    help="Impact Profile - developer impact scoring and snapshot history",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold cyan]Impact Profile[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


@app.callback()
def _root(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """
    Score developer impact from aggregated contribution statistics and
    follow how the score moves across daily snapshots.
    """


# Import subcommands to register them
from .score import score as _score  # noqa: F401, E402
from .diff import diff as _diff  # noqa: F401, E402
from .trend import trend as _trend  # noqa: F401, E402


def main() -> None:
    app()


__all__ = ["app", "main"]
