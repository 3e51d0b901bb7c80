"""Utility functions for page-tree."""

import logging
import re
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from loguru import logger


INDEX_FILE_NAMES = ("_index.md", "index.md")
MARKDOWN_EXTENSIONS = (".md",)
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg", ".avif")
CONTENT_ROOT_NAME = "content"
HOME_PAGE_TITLE = "Home Page"
DEFAULT_MAX_DEPTH = 64
PATH_SEPARATOR = "/"

_SEPARATOR_RUN_RE = re.compile(r"[-_]+")
_WORD_START_RE = re.compile(r"\b\w")


def split_path(path: str) -> List[str]:
    """Split a listing path into its segments, dropping empty ones.

    Examples:
        >>> split_path("content/posts/hello.md")
        ['content', 'posts', 'hello.md']
        >>> split_path("content//posts/")
        ['content', 'posts']
    """
    return [segment for segment in path.split(PATH_SEPARATOR) if segment]


def leaf_name(path: str) -> str:
    """Return the final segment of a path, or an empty string."""
    segments = split_path(path)
    return segments[-1] if segments else ""


def parent_path(path: str) -> Optional[str]:
    """Return the path with its final segment removed.

    Single-segment paths have no parent and return None.
    """
    segments = split_path(path)
    if len(segments) < 2:
        return None
    return PATH_SEPARATOR.join(segments[:-1])


def path_depth(path: str) -> int:
    return len(split_path(path))


def is_index_file(name: str, index_names: Iterable[str] = INDEX_FILE_NAMES) -> bool:
    """Check if a file name marks its directory as a page (Hugo branch or leaf bundle)."""
    return name in tuple(index_names)


def is_markdown_file(name: str, extensions: Iterable[str] = MARKDOWN_EXTENSIONS) -> bool:
    """Check for a markdown extension, ignoring case like is_asset_file."""
    return name.lower().endswith(tuple(extension.lower() for extension in extensions))


def is_asset_file(name: str) -> bool:
    """Check if a file name looks like an image asset (case-insensitive)."""
    return name.lower().endswith(IMAGE_EXTENSIONS)


def strip_markdown_extension(
    name: str, extensions: Iterable[str] = MARKDOWN_EXTENSIONS
) -> str:
    lowered = name.lower()
    for extension in extensions:
        if extension and lowered.endswith(extension.lower()):
            return name[: -len(extension)]
    return name


def index_stems(
    index_names: Iterable[str] = INDEX_FILE_NAMES,
    extensions: Iterable[str] = MARKDOWN_EXTENSIONS,
) -> frozenset[str]:
    """Index file names with their markdown extension removed (e.g. "_index")."""
    extensions = tuple(extensions)
    return frozenset(strip_markdown_extension(name, extensions) for name in index_names)


def format_title(
    name: str,
    index_names: Iterable[str] = INDEX_FILE_NAMES,
    extensions: Iterable[str] = MARKDOWN_EXTENSIONS,
) -> str:
    """Format a raw file or folder name into a display title.

    The markdown extension is stripped, an index stem collapses to an empty
    title, runs of hyphens and underscores become single spaces, and the first
    letter of every word is upper-cased.

    Examples:
        >>> format_title("my-cool_page.md")
        'My Cool Page'
        >>> format_title("_index.md")
        ''
    """
    extensions = tuple(extensions)
    stem = strip_markdown_extension(name, extensions)
    if stem in index_stems(index_names, extensions):
        return ""
    stem = _SEPARATOR_RUN_RE.sub(" ", stem)
    return _WORD_START_RE.sub(lambda match: match.group(0).upper(), stem).strip()


def setup_logging(
    log_level: str = "INFO",
    log_to_file: bool = False,
    log_to_stdout: bool = False,
    log_file: Optional[Path] = None,
) -> None:  # pragma: no cover
    """Configure loguru sinks for the current entry point.

    Args:
        log_level: Minimum level for all sinks
        log_to_file: Write to a rotating log file
        log_to_stdout: Write to stderr (stdout is reserved for command output)
        log_file: Override the log file location (default ~/.page-tree/page-tree.log)
    """
    # Remove the default handler so entry points decide where output goes
    logger.remove()

    if log_to_file:
        log_path = log_file or Path.home() / ".page-tree" / "page-tree.log"
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_path),
            level=log_level,
            rotation="10 MB",
            retention="10 days",
            backtrace=True,
            diagnose=True,
            enqueue=True,
            colorize=False,
        )

    if log_to_stdout:
        logger.add(sys.stderr, level=log_level, backtrace=True, diagnose=True, colorize=True)

    # Reduce noise from third-party libraries
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)
