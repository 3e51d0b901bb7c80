"""Schema exports.

Import listing and tree models from page_tree.schemas rather than the
individual modules.
"""

from page_tree.schemas.listing import (
    EntryType,
    ListingEntry,
    parse_listing,
)
from page_tree.schemas.tree import (
    FileNode,
    PageKind,
    PageNode,
)

__all__ = [
    "EntryType",
    "ListingEntry",
    "parse_listing",
    "FileNode",
    "PageKind",
    "PageNode",
]
