"""Common test fixtures."""

import os
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional

import pytest

from page_tree import config as config_module
from page_tree.config import PageTreeConfig
from page_tree.schemas.listing import EntryType, ListingEntry
from page_tree.services.content_tree_service import ContentTreeService
from page_tree.services.exceptions import ListingUnavailableError

EntryFactory = Callable[..., ListingEntry]


@pytest.fixture(autouse=True)
def config_home(tmp_path, monkeypatch) -> Iterator[Path]:
    """Point HOME and the config directory at a temporary directory."""
    monkeypatch.setenv("HOME", str(tmp_path))
    # On Windows, also set USERPROFILE
    if os.name == "nt":
        monkeypatch.setenv("USERPROFILE", str(tmp_path))
    monkeypatch.setenv("PAGE_TREE_CONFIG_DIR", str(tmp_path / ".page-tree"))

    # Invalidate config cache to ensure clean state for each test
    config_module._CONFIG_CACHE = None
    yield tmp_path
    config_module._CONFIG_CACHE = None


@pytest.fixture
def app_config() -> PageTreeConfig:
    return PageTreeConfig(env="test")


def make_entry(path: str, kind: str = "blob", sha: Optional[str] = None) -> ListingEntry:
    """Build a listing entry; kind uses GitHub's "tree"/"blob" names."""
    return ListingEntry(path=path, type=EntryType(kind), content_hash=sha)


@pytest.fixture
def entry() -> EntryFactory:
    return make_entry


@pytest.fixture
def hugo_listing() -> List[ListingEntry]:
    """A small Hugo site, in scrambled order.

    content/
    ├── _index.md
    ├── about.md
    ├── logo.svg
    ├── docs/                (no index)
    │   ├── getting-started.md
    │   └── api/
    │       ├── index.md
    │       └── reference.md
    └── posts/
        ├── _index.md
        ├── hello-world.md
        ├── second_post.md
        └── images/
            └── cover.png
    """
    return [
        make_entry("content/posts/second_post.md", sha="sha-second"),
        make_entry("content/docs/api/reference.md", sha="sha-reference"),
        make_entry("content/logo.svg", sha="sha-logo"),
        make_entry("content/posts", "tree", sha="sha-posts"),
        make_entry("content/_index.md", sha="sha-home"),
        make_entry("content/docs", "tree", sha="sha-docs"),
        make_entry("content/posts/images/cover.png", sha="sha-cover"),
        make_entry("content/about.md", sha="sha-about"),
        make_entry("content", "tree", sha="sha-content"),
        make_entry("content/posts/_index.md", sha="sha-posts-index"),
        make_entry("content/docs/api", "tree", sha="sha-api"),
        make_entry("content/posts/hello-world.md", sha="sha-hello"),
        make_entry("content/docs/getting-started.md", sha="sha-started"),
        make_entry("content/posts/images", "tree", sha="sha-images"),
        make_entry("content/docs/api/index.md", sha="sha-api-index"),
    ]


@pytest.fixture
def relative_listing() -> List[ListingEntry]:
    """A listing fetched from inside the content directory (no content/ prefix)."""
    return [
        make_entry("_index.md", sha="sha-home"),
        make_entry("about.md", sha="sha-about"),
        make_entry("posts", "tree", sha="sha-posts"),
        make_entry("posts/_index.md", sha="sha-posts-index"),
        make_entry("posts/hello.md", sha="sha-hello"),
    ]


class FakeListingClient:
    """In-memory listing source keyed by document id."""

    def __init__(self, listings: Dict[str, List[ListingEntry]]):
        self.listings = listings
        self.calls: List[str] = []

    async def fetch_listing(self, document_id: str) -> List[ListingEntry]:
        self.calls.append(document_id)
        if document_id not in self.listings:
            raise ListingUnavailableError(document_id, "repository not found")
        return list(self.listings[document_id])

    async def fetch_content(self, document_id: str, path: str) -> str:
        raise ListingUnavailableError(document_id, "content not stored")


@pytest.fixture
def listing_client(hugo_listing, relative_listing) -> FakeListingClient:
    return FakeListingClient({"site-a": hugo_listing, "site-b": relative_listing})


@pytest.fixture
def content_tree_service(listing_client, app_config) -> ContentTreeService:
    return ContentTreeService(listing_client=listing_client, config=app_config)
