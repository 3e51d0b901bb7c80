"""Transform a file tree into a page tree.

Logic:
1. Directories holding an index file (_index.md or index.md) are pages with children.
2. The index file itself is hidden from the children; it is the directory's own content.
3. Other markdown files are leaf pages. Non-markdown files are assets and left out.
4. The top-level content directory is the document root: with an index file it
   becomes the "Home Page", without one its children move up to the top level.
5. Siblings are sorted with the Home Page first, then by title ignoring case.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, TYPE_CHECKING, assert_never

from loguru import logger

from page_tree.schemas.listing import EntryType
from page_tree.schemas.tree import FileNode, PageKind, PageNode
from page_tree.utils import (
    CONTENT_ROOT_NAME,
    DEFAULT_MAX_DEPTH,
    HOME_PAGE_TITLE,
    INDEX_FILE_NAMES,
    MARKDOWN_EXTENSIONS,
    format_title,
    index_stems,
    is_index_file,
    is_markdown_file,
)

if TYPE_CHECKING:  # pragma: no cover
    from page_tree.config import PageTreeConfig


@dataclass(frozen=True)
class PageTreeOptions:
    """Content conventions used when building a page tree."""

    index_file_names: Tuple[str, ...] = INDEX_FILE_NAMES
    markdown_extensions: Tuple[str, ...] = MARKDOWN_EXTENSIONS
    content_root_name: Optional[str] = CONTENT_ROOT_NAME
    max_depth: int = DEFAULT_MAX_DEPTH

    @classmethod
    def from_config(cls, config: "PageTreeConfig") -> "PageTreeOptions":
        return cls(
            index_file_names=tuple(config.index_file_names),
            markdown_extensions=tuple(config.markdown_extensions),
            content_root_name=config.content_root_name or None,
            max_depth=config.max_depth,
        )

    def is_index(self, node: FileNode) -> bool:
        return node.type == EntryType.FILE and is_index_file(node.name, self.index_file_names)

    def is_index_name(self, name: str) -> bool:
        """Check a directory name against index spellings, with or without extension."""
        return is_index_file(name, self.index_file_names) or name in index_stems(
            self.index_file_names, self.markdown_extensions
        )

    def is_content_root(self, node: FileNode) -> bool:
        return (
            self.content_root_name is not None
            and node.type == EntryType.DIRECTORY
            and node.name == self.content_root_name
        )


def transform_to_page_tree(
    nodes: Iterable[FileNode], options: Optional[PageTreeOptions] = None
) -> List[PageNode]:
    """Transform root file nodes into root page nodes.

    Never raises: nodes that cannot be pages are left out.

    Args:
        nodes: Root nodes as returned by build_tree
        options: Content conventions, defaults to Hugo's

    Returns:
        Sorted root pages
    """
    options = options or PageTreeOptions()

    top_level: List[FileNode] = []
    document_root: Optional[FileNode] = None
    for node in nodes or []:
        if options.is_content_root(node):
            # A content root without its own page is only a container
            if find_index_file(node, options) is None:
                top_level.extend(node.children)
                continue
            document_root = node
        top_level.append(node)

    pages = _build_pages(top_level, options, document_root)
    logger.debug(f"Built page tree: roots={len(pages)}")
    return pages


def find_index_file(node: FileNode, options: Optional[PageTreeOptions] = None) -> Optional[FileNode]:
    """Return the index file of a directory, the first one in child order if several."""
    options = options or PageTreeOptions()
    return next((child for child in node.children if options.is_index(child)), None)


def sort_pages(pages: Sequence[PageNode]) -> List[PageNode]:
    """Sort sibling pages: Home Page first, then case-insensitively by title.

    The sort is stable, so pages with equal titles keep their relative order.
    """
    return sorted(pages, key=lambda page: (page.title != HOME_PAGE_TITLE, page.title.casefold()))


def _build_pages(
    top_level: Sequence[FileNode], options: PageTreeOptions, document_root: Optional[FileNode]
) -> List[PageNode]:
    """Build pages bottom-up without recursion.

    Directories are collected in pre-order with an explicit stack, then built
    in reverse so every directory's child pages exist before the directory.
    """
    if options.max_depth <= 0:
        return []

    directories: List[Tuple[FileNode, int]] = []
    stack: List[Tuple[FileNode, int]] = [(node, 0) for node in top_level if node.is_directory]
    while stack:
        node, depth = stack.pop()
        directories.append((node, depth))
        if depth + 1 < options.max_depth:
            stack.extend((child, depth + 1) for child in node.children if child.is_directory)

    built: Dict[int, PageNode] = {}
    truncated = 0
    for node, depth in reversed(directories):
        children: List[PageNode] = []
        if depth + 1 < options.max_depth:
            # Every index file is consumed by the directory, not just the one that wins
            visible = [child for child in node.children if not options.is_index(child)]
            children = _sibling_pages(visible, options, built, root_level=False)
        elif node.children:
            truncated += 1
        built[id(node)] = _directory_page(node, children, options, node is document_root)

    if truncated:
        logger.debug(f"Page tree depth limit reached below {truncated} directories")

    return _sibling_pages(top_level, options, built, root_level=True)


def _sibling_pages(
    nodes: Sequence[FileNode],
    options: PageTreeOptions,
    built: Dict[int, PageNode],
    root_level: bool,
) -> List[PageNode]:
    pages: List[PageNode] = []
    for node in nodes:
        page: Optional[PageNode]
        match node.type:
            case EntryType.DIRECTORY:
                page = built[id(node)]
            case EntryType.FILE:
                page = _file_page(node, options, root_level)
            case _:  # pragma: no cover
                assert_never(node.type)

        if page is not None:
            pages.append(page)

    return sort_pages(pages)


def _directory_page(
    node: FileNode, children: List[PageNode], options: PageTreeOptions, is_document_root: bool
) -> PageNode:
    index_file = find_index_file(node, options)

    if is_document_root or options.is_index_name(node.name):
        title = HOME_PAGE_TITLE
    else:
        title = format_title(node.name, options.index_file_names, options.markdown_extensions)

    return PageNode(
        id=node.content_hash or node.path,
        title=title,
        path=node.path,
        content_path=index_file.path if index_file else None,
        kind=PageKind.PAGE if index_file else PageKind.FOLDER,
        children=children,
        is_index_backed=index_file is not None,
        source_node=node,
    )


def _file_page(node: FileNode, options: PageTreeOptions, root_level: bool) -> Optional[PageNode]:
    if options.is_index(node):
        # Nested index files belong to their directory; only a root one stands alone
        if not root_level:
            return None
        return PageNode(
            id=node.content_hash or node.path,
            title=HOME_PAGE_TITLE,
            path=node.path,
            content_path=node.path,
            kind=PageKind.PAGE,
            is_index_backed=True,
            source_node=node,
        )

    if not is_markdown_file(node.name, options.markdown_extensions):
        return None

    return PageNode(
        id=node.content_hash or node.path,
        title=format_title(node.name, options.index_file_names, options.markdown_extensions),
        path=node.path,
        content_path=node.path,
        kind=PageKind.PAGE,
        is_index_backed=False,
        source_node=node,
    )
