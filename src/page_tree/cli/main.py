"""Main CLI entry point for page-tree."""

from page_tree.cli.app import app

# Register commands
from page_tree.cli.commands import fetch, tree  # noqa: F401  # pragma: no cover

if __name__ == "__main__":  # pragma: no cover
    app()
