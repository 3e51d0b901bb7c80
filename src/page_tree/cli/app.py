"""Typer application for the page-tree CLI."""

from typing import Optional

import typer

from page_tree import __version__
from page_tree.config import init_cli_logging


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:  # pragma: no cover
        typer.echo(f"page-tree version: {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="page-tree",
    help="Build page trees from flat repository listings",
    no_args_is_help=True,
)


@app.callback()
def app_callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """page-tree - render and fetch static-site page trees."""
    init_cli_logging()
