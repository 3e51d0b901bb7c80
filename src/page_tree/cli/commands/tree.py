"""Tree command for page-tree CLI."""

import json
from pathlib import Path
from typing import Annotated, Any, List, Optional, Sequence, Union

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from page_tree.cli.app import app
from page_tree.config import ConfigManager
from page_tree.schemas.listing import ListingEntry, parse_listing
from page_tree.schemas.tree import FileNode, PageNode
from page_tree.services.file_tree import build_tree
from page_tree.services.page_tree import PageTreeOptions, transform_to_page_tree
from page_tree.services.visibility import VisibilityState
from page_tree.utils import is_asset_file

# Create rich console
console = Console()


def load_listing(listing_file: Path) -> List[ListingEntry]:
    """Read a listing saved as JSON.

    Accepts either a bare list of records or a GitHub tree response with the
    records under "tree".

    Raises:
        ValueError: If the file is not JSON or has neither shape
    """
    try:
        data: Any = json.loads(listing_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"{listing_file} is not valid JSON: {e}") from e

    if isinstance(data, dict):
        data = data.get("tree")
    if not isinstance(data, list):
        raise ValueError(f"{listing_file} does not contain a listing")

    return parse_listing(data)


def page_label(page: PageNode) -> str:
    if not page.has_content:
        return f"[bold]{escape(page.title)}/[/bold] [dim]{escape(page.path)}[/dim]"
    if page.is_index_backed:
        return f"[bold cyan]{escape(page.title)}[/bold cyan] [dim]{escape(page.content_path or '')}[/dim]"
    return f"{escape(page.title)} [dim]{escape(page.content_path or '')}[/dim]"


def file_label(node: FileNode) -> str:
    if node.is_directory:
        return f"[bold]{escape(node.name)}/[/bold]"
    if is_asset_file(node.name):
        return f"[magenta]{escape(node.name)}[/magenta]"
    return escape(node.name)


def add_nodes_to_tree(
    branch: Tree,
    nodes: Sequence[Union[PageNode, FileNode]],
    visibility: VisibilityState,
    expand_all: bool,
) -> None:
    """Add nodes to a rich tree, descending only into expanded nodes."""
    for node in nodes:
        label = page_label(node) if isinstance(node, PageNode) else file_label(node)
        if node.children and not visibility.is_open(node.path, default=expand_all):
            branch.add(f"{label} [dim]({len(node.children)} hidden)[/dim]")
            continue

        child_branch = branch.add(label)
        add_nodes_to_tree(child_branch, node.children, visibility, expand_all)


def render_tree(
    title: str,
    nodes: Sequence[Union[PageNode, FileNode]],
    visibility: VisibilityState,
    expand_all: bool = False,
) -> Tree:
    tree = Tree(title)
    if not nodes:
        tree.add("No pages")
        return tree
    add_nodes_to_tree(tree, nodes, visibility, expand_all)
    return tree


@app.command()
def tree(
    listing_file: Annotated[
        Path,
        typer.Argument(help="JSON file holding a flat listing ({path, type, sha} records)"),
    ],
    files: bool = typer.Option(False, "--files", help="Show the file tree instead of pages"),
    expand: Annotated[
        Optional[List[str]],
        typer.Option("--expand", "-e", help="Path to show expanded. Repeatable."),
    ] = None,
    collapse: Annotated[
        Optional[List[str]],
        typer.Option("--collapse", "-c", help="Path to keep collapsed. Repeatable."),
    ] = None,
    expand_all: bool = typer.Option(
        False, "--expand-all", help="Expand every path not collapsed explicitly"
    ),
):
    """Render the page tree of a saved listing.

    Folders are collapsed unless expanded with --expand or --expand-all.
    """
    try:
        entries = load_listing(listing_file)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    config = ConfigManager().config
    options = PageTreeOptions.from_config(config)

    visibility = VisibilityState()
    for path in expand or []:
        visibility.set_expanded(path, True)
    for path in collapse or []:
        visibility.set_expanded(path, False)

    file_tree = build_tree(entries, max_depth=options.max_depth)
    logger.info(f"Rendering tree for {listing_file}: entries={len(entries)}")

    if files:
        rendered = render_tree(str(listing_file), file_tree, visibility, expand_all)
    else:
        pages = transform_to_page_tree(file_tree, options)
        rendered = render_tree(str(listing_file), pages, visibility, expand_all)

    console.print(rendered)
