"""Schemas for flat repository listings.

A listing is what the hosting service returns for a repository tree: one
record per file or directory, in no particular order. GitHub's git trees API
uses "tree" for directories and "blob" for files, and calls the content hash
"sha"; both spellings are accepted here.
"""

from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional

from loguru import logger
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from page_tree.utils import PATH_SEPARATOR, split_path


class EntryType(str, Enum):
    """Kinds of listing entries, valued by their wire names."""

    FILE = "blob"
    DIRECTORY = "tree"


class ListingEntry(BaseModel):
    """One record of a flat listing."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(min_length=1)
    type: EntryType
    content_hash: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("content_hash", "sha"),
        serialization_alias="sha",
    )

    @field_validator("path")
    @classmethod
    def strip_outer_separators(cls, value: str) -> str:
        """Listing paths are relative; drop stray and repeated slashes."""
        segments = split_path(value.strip())
        if not segments:
            raise ValueError("path must contain at least one segment")
        return PATH_SEPARATOR.join(segments)

    @field_validator("content_hash")
    @classmethod
    def empty_hash_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @property
    def is_directory(self) -> bool:
        return self.type == EntryType.DIRECTORY


def parse_listing(
    raw_items: Iterable[Mapping[str, Any]], prefix: Optional[str] = None
) -> List[ListingEntry]:
    """Validate raw listing records, keeping only well-formed files and directories.

    Records without a path, or with a type other than "tree"/"blob" (GitHub
    reports submodules as "commit"), are dropped rather than raised.

    Args:
        raw_items: Records shaped like GitHub tree items ({path, type, sha})
        prefix: Optional directory path prepended to every record, used when a
            listing was fetched relative to a subdirectory

    Returns:
        List of ListingEntry in input order
    """
    prefix = (prefix or "").strip(PATH_SEPARATOR)
    entries: List[ListingEntry] = []
    skipped = 0

    for item in raw_items:
        if not isinstance(item, Mapping):
            skipped += 1
            continue

        data = dict(item)
        if prefix and isinstance(data.get("path"), str):
            data["path"] = f"{prefix}{PATH_SEPARATOR}{data['path'].strip(PATH_SEPARATOR)}"

        try:
            entries.append(ListingEntry.model_validate(data))
        except ValidationError:
            skipped += 1

    if skipped:
        logger.debug(f"Skipped {skipped} malformed listing records")

    return entries
