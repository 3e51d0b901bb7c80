"""CLI tools for page-tree."""
