"""Expand/collapse state for tree presentation.

Only explicit user choices are stored. A path in neither set has never been
touched and the caller decides what that means (collapsed, for a sidebar).
State is keyed by path strings and does not require the path to exist in the
current tree, so it survives rebuilds of the tree until reset().
"""

from typing import Set

from loguru import logger


class VisibilityState:
    """Sparse set of explicitly expanded and explicitly collapsed paths.

    A path is never in both sets. One instance belongs to one document
    session and is expected to be driven by a single owner.
    """

    def __init__(self) -> None:
        self._expanded: Set[str] = set()
        self._collapsed: Set[str] = set()

    @property
    def expanded(self) -> frozenset[str]:
        return frozenset(self._expanded)

    @property
    def collapsed(self) -> frozenset[str]:
        return frozenset(self._collapsed)

    def set_expanded(self, path: str, expanded: bool) -> None:
        """Record an explicit choice for a path, evicting the opposite one."""
        if expanded:
            self._collapsed.discard(path)
            self._expanded.add(path)
        else:
            self._expanded.discard(path)
            self._collapsed.add(path)

    def toggle(self, path: str, currently_expanded: bool) -> None:
        self.set_expanded(path, not currently_expanded)

    def is_expanded(self, path: str) -> bool:
        return path in self._expanded

    def is_collapsed(self, path: str) -> bool:
        return path in self._collapsed

    def is_open(self, path: str, default: bool = False) -> bool:
        """Resolve whether a path should render expanded.

        Args:
            path: Node path
            default: Answer for paths without an explicit choice

        Returns:
            True if expanded explicitly, False if collapsed explicitly, else default
        """
        if path in self._expanded:
            return True
        if path in self._collapsed:
            return False
        return default

    def reset(self) -> None:
        """Forget every explicit choice."""
        logger.debug(
            f"Resetting visibility state: expanded={len(self._expanded)}, "
            f"collapsed={len(self._collapsed)}"
        )
        self._expanded.clear()
        self._collapsed.clear()
