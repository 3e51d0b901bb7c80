"""Fetch command for page-tree CLI."""

import asyncio
import json
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from loguru import logger
from rich.console import Console

from page_tree.cli.app import app
from page_tree.clients.github import GitHubListingClient, get_client
from page_tree.config import ConfigManager, PageTreeConfig
from page_tree.schemas.listing import ListingEntry
from page_tree.services.exceptions import ListingUnavailableError

console = Console(stderr=True)


async def fetch_listing(document_id: str, config: PageTreeConfig) -> List[ListingEntry]:
    async with get_client(config) as http_client:
        return await GitHubListingClient(http_client, config).fetch_listing(document_id)


def listing_to_json(entries: List[ListingEntry]) -> str:
    """Serialize entries back to GitHub's {path, type, sha} shape."""
    return json.dumps(
        [entry.model_dump(mode="json", by_alias=True) for entry in entries],
        indent=2,
    )


@app.command()
def fetch(
    document_id: Annotated[str, typer.Argument(help="Document (repository) to list")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the listing to this file instead of stdout"),
    ] = None,
):
    """Fetch the content listing of a document from GitHub as JSON."""
    config = ConfigManager().config

    try:
        entries = asyncio.run(fetch_listing(document_id, config))
    except ListingUnavailableError as e:
        logger.error(f"Error fetching listing: {e}")
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    payload = listing_to_json(entries)
    if output is None:
        typer.echo(payload)
        return

    output.write_text(payload + "\n", encoding="utf-8")
    console.print(f"[green]Wrote {len(entries)} entries to {output}[/green]")
