"""Schemas for file and page trees."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from page_tree.schemas.listing import EntryType


class FileNode(BaseModel):
    """Node of the nested file tree built from a flat listing."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: str  # Full path, ancestors' names joined by "/"
    type: EntryType
    children: List["FileNode"] = Field(default_factory=list)  # Always empty for files
    content_hash: Optional[str] = None

    @property
    def is_directory(self) -> bool:
        return self.type == EntryType.DIRECTORY

    @property
    def has_children(self) -> bool:
        return bool(self.children)


class PageKind(str, Enum):
    """What a page was built from. Informational only; every page is addressable."""

    PAGE = "page"
    FOLDER = "folder"


class PageNode(BaseModel):
    """Node of the page tree.

    A directory holding an index file becomes a page whose content lives in
    that index file; the index file itself never shows up among the children.
    """

    model_config = ConfigDict(frozen=True)

    id: str  # Content hash, or the path when no hash is known
    title: str
    path: str  # Structural path: folder path for nested pages, file path for leaves
    content_path: Optional[str] = None  # Markdown file holding the page content
    kind: PageKind
    children: List["PageNode"] = Field(default_factory=list)
    is_index_backed: bool = False
    source_node: FileNode

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    @property
    def has_content(self) -> bool:
        return self.content_path is not None


# Support for recursive models
FileNode.model_rebuild()
PageNode.model_rebuild()
