"""CLI commands for page-tree."""

from page_tree.cli.commands import fetch, tree

__all__ = ["fetch", "tree"]
