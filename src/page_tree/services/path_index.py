"""Path-keyed lookup over a file tree or a page tree."""

from typing import Dict, Generic, Iterable, Iterator, List, Optional, TypeVar

from page_tree.schemas.tree import FileNode, PageNode
from page_tree.utils import parent_path

Node = TypeVar("Node", FileNode, PageNode)


def build_path_index(nodes: Iterable[Node]) -> Dict[str, Node]:
    """Flatten a tree into a mapping from path to node.

    Walks the tree once in pre-order with an explicit stack, so deep trees
    cannot exhaust the interpreter's recursion limit. Nodes are keyed by their
    own path (never a page's content path); if a path somehow occurs twice the
    first node in pre-order wins.
    """
    index: Dict[str, Node] = {}
    stack: List[Node] = list(reversed(list(nodes)))

    while stack:
        node = stack.pop()
        index.setdefault(node.path, node)
        stack.extend(reversed(node.children))

    return index


class PathIndex(Generic[Node]):
    """Read-only path index over one built tree.

    The index is never updated in place; build a new one whenever the tree is
    rebuilt.
    """

    def __init__(self, nodes: Iterable[Node] = ()):
        self._nodes: Dict[str, Node] = build_path_index(nodes)

    def get_node_by_path(self, path: str) -> Optional[Node]:
        return self._nodes.get(path)

    def find_enclosing(self, path: str) -> Optional[Node]:
        """Find the nearest indexed ancestor of a path.

        The path itself does not need to be indexed, which makes this usable
        for "which folder am I inside" lookups from a content file path.
        """
        current = parent_path(path)
        while current is not None:
            node = self._nodes.get(current)
            if node is not None:
                return node
            current = parent_path(current)
        return None

    def paths(self) -> List[str]:
        return list(self._nodes.keys())

    def __contains__(self, path: object) -> bool:
        return path in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)
