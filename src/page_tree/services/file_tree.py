"""Build a nested file tree from a flat repository listing."""

from typing import Dict, Iterable, List

from loguru import logger

from page_tree.schemas.listing import ListingEntry
from page_tree.schemas.tree import FileNode
from page_tree.utils import DEFAULT_MAX_DEPTH, leaf_name, parent_path, path_depth


def build_tree(
    entries: Iterable[ListingEntry], max_depth: int = DEFAULT_MAX_DEPTH
) -> List[FileNode]:
    """Build a hierarchical file tree from listing entries given in any order.

    Entries are sorted by path first so the child order of every directory, and
    anything derived from it later, is the same for every permutation of the
    input.

    An entry whose parent directory is missing from the listing is dropped, and
    so is everything below it. Entries nested deeper than max_depth segments are
    dropped the same way.

    Args:
        entries: Flat listing entries
        max_depth: Maximum number of path segments kept

    Returns:
        Root nodes (entries without a "/" in their path), sorted by path
    """
    sorted_entries = sorted(entries, key=lambda entry: entry.path)

    # First pass: one node per distinct path, independent of hierarchy
    node_map: Dict[str, FileNode] = {}
    for entry in sorted_entries:
        if entry.path in node_map:
            continue
        node_map[entry.path] = FileNode(
            name=leaf_name(entry.path),
            path=entry.path,
            type=entry.type,
            content_hash=entry.content_hash,
        )

    # Second pass: attach every node to its parent
    roots: List[FileNode] = []
    dropped = 0
    for path, node in node_map.items():
        if path_depth(path) > max_depth:
            dropped += 1
            continue

        parent = parent_path(path)
        if parent is None:
            roots.append(node)
            continue

        parent_node = node_map.get(parent)
        if parent_node is None or not parent_node.is_directory:
            dropped += 1
            continue

        parent_node.children.append(node)

    if dropped:
        logger.debug(f"Dropped {dropped} listing entries without a reachable parent")
    logger.debug(f"Built file tree: roots={len(roots)}, nodes={len(node_map)}")

    return roots
