"""Exceptions raised at the edges of page-tree.

Tree building itself never raises; these cover the collaborators that feed it.
"""

from typing import Optional


class PageTreeError(Exception):
    """Base exception for page-tree errors."""

    pass


class ListingUnavailableError(PageTreeError):
    """Raised when the flat listing (or a file body) cannot be retrieved."""

    def __init__(self, document_id: str, reason: Optional[str] = None):
        self.document_id = document_id
        self.reason = reason
        message = f"Listing unavailable for document '{document_id}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
