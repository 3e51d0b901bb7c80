"""Interface of the collaborators that supply listings and file bodies."""

from typing import List, Protocol

from page_tree.schemas.listing import ListingEntry


class ListingClient(Protocol):
    """Protocol for listing sources.

    Implementations raise ListingUnavailableError for any retrieval failure.
    """

    async def fetch_listing(self, document_id: str) -> List[ListingEntry]:
        """Return the flat listing of a document's repository, in any order."""
        ...

    async def fetch_content(self, document_id: str, path: str) -> str:
        """Return the raw text of one file."""
        ...
