"""Service holding the trees of one document session."""

from typing import Iterable, List, Optional

from loguru import logger

from page_tree.clients.base import ListingClient
from page_tree.config import PageTreeConfig
from page_tree.schemas.listing import ListingEntry
from page_tree.schemas.tree import FileNode, PageNode
from page_tree.services.exceptions import ListingUnavailableError
from page_tree.services.file_tree import build_tree
from page_tree.services.page_tree import PageTreeOptions, transform_to_page_tree
from page_tree.services.path_index import PathIndex
from page_tree.services.visibility import VisibilityState
from page_tree.utils import HOME_PAGE_TITLE, is_index_file, leaf_name, parent_path

LISTING_ERROR_MESSAGE = "Failed to load file structure. Please try again later."


class ContentTreeService:
    """Service for building and querying the trees of one document.

    Trees and indexes are rebuilt from scratch whenever the listing changes.
    The visibility state outlives rebuilds and is only cleared by reset() or
    by loading a different document.
    """

    def __init__(
        self,
        listing_client: Optional[ListingClient] = None,
        config: Optional[PageTreeConfig] = None,
        visibility: Optional[VisibilityState] = None,
    ):
        """Initialize the content tree service.

        Args:
            listing_client: Source of listings, required for load()
            config: Content conventions; defaults apply when omitted
            visibility: Existing visibility state to share with a view
        """
        self.listing_client = listing_client
        self.config = config or PageTreeConfig()
        self.options = PageTreeOptions.from_config(self.config)
        self.visibility = visibility or VisibilityState()

        self.document_id: Optional[str] = None
        self.items: List[ListingEntry] = []
        self.file_tree: List[FileNode] = []
        self.page_tree: List[PageNode] = []
        self.is_loading = False
        self.error: Optional[str] = None

        self._file_index: PathIndex[FileNode] = PathIndex()
        self._page_index: PathIndex[PageNode] = PathIndex()

    def set_items(self, items: Iterable[ListingEntry]) -> None:
        """Replace the listing and rebuild both trees and their indexes."""
        self.items = list(items)
        self.build_tree()

    def build_tree(self) -> None:
        self.file_tree = build_tree(self.items, max_depth=self.options.max_depth)
        self.page_tree = transform_to_page_tree(self.file_tree, self.options)
        self._file_index = PathIndex(self.file_tree)
        self._page_index = PathIndex(self.page_tree)

    def get_node_by_path(self, path: str) -> Optional[FileNode]:
        return self._file_index.get_node_by_path(path)

    def get_page_by_path(self, path: str) -> Optional[PageNode]:
        return self._page_index.get_node_by_path(path)

    def child_pages(self, file_path: str) -> List[PageNode]:
        """List the pages shown below the content of an index file.

        Leaf pages have no children to show. For an index file the children of
        its folder's page are returned; when the folder is the root, or has no
        page, the top-level pages other than the Home Page are returned.

        Args:
            file_path: Path of the markdown file being viewed

        Returns:
            Child pages in display order
        """
        if not is_index_file(leaf_name(file_path), self.options.index_file_names):
            return []

        folder_path = parent_path(file_path)
        if folder_path is not None:
            folder_page = self._page_index.get_node_by_path(folder_path)
            if folder_page is not None:
                return list(folder_page.children)

        return [page for page in self.page_tree if page.title != HOME_PAGE_TITLE]

    async def load(self, document_id: str) -> None:
        """Fetch the listing of a document and rebuild the trees.

        A failed fetch leaves an error message and an empty tree behind rather
        than raising.
        """
        if self.listing_client is None:
            raise ValueError("ContentTreeService.load() requires a listing client")

        if document_id != self.document_id:
            # Expanded paths of one document mean nothing in another
            self.visibility.reset()
            self.document_id = document_id

        self.is_loading = True
        try:
            entries = await self.listing_client.fetch_listing(document_id)
            self.set_items(entries)
            self.error = None
        except ListingUnavailableError as e:
            logger.error(f"Failed to fetch file tree: {e}")
            self.error = LISTING_ERROR_MESSAGE
            self.set_items([])
        finally:
            self.is_loading = False

    def reset(self) -> None:
        """Forget the document, its trees and its visibility state."""
        self.document_id = None
        self.items = []
        self.file_tree = []
        self.page_tree = []
        self.is_loading = False
        self.error = None
        self._file_index = PathIndex()
        self._page_index = PathIndex()
        self.visibility.reset()
