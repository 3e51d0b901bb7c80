"""Services for building and querying page trees."""

from page_tree.services.content_tree_service import ContentTreeService
from page_tree.services.file_tree import build_tree
from page_tree.services.page_tree import PageTreeOptions, sort_pages, transform_to_page_tree
from page_tree.services.path_index import PathIndex, build_path_index
from page_tree.services.visibility import VisibilityState

__all__ = [
    "ContentTreeService",
    "build_tree",
    "PageTreeOptions",
    "sort_pages",
    "transform_to_page_tree",
    "PathIndex",
    "build_path_index",
    "VisibilityState",
]
