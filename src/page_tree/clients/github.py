"""Listing client backed by the GitHub git trees API.

Each document is a repository owned by the configured account. The listing
covers the content directory only: the top-level tree of the branch is read to
find the content directory's hash, then that directory is listed recursively.
Paths are returned relative to the repository root so they can be passed back
to fetch_content unchanged.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

from httpx import AsyncClient, HTTPError, Response, Timeout
from loguru import logger

from page_tree.config import PageTreeConfig
from page_tree.schemas.listing import EntryType, ListingEntry, parse_listing
from page_tree.services.exceptions import ListingUnavailableError

GITHUB_JSON = "application/vnd.github+json"
GITHUB_RAW = "application/vnd.github.raw+json"


@asynccontextmanager
async def get_client(config: PageTreeConfig) -> AsyncIterator[AsyncClient]:
    """Create an HTTPX client for the GitHub API described by config."""
    headers = {"Accept": GITHUB_JSON, "X-GitHub-Api-Version": "2022-11-28"}
    if config.github_token:
        headers["Authorization"] = f"Bearer {config.github_token}"

    async with AsyncClient(
        base_url=config.github_api_url,
        headers=headers,
        timeout=Timeout(config.request_timeout),
    ) as client:
        yield client


class GitHubListingClient:
    """Typed client for repository listings and file bodies.

    Usage:
        async with get_client(config) as http_client:
            client = GitHubListingClient(http_client, config)
            entries = await client.fetch_listing(document_id)
    """

    def __init__(self, http_client: AsyncClient, config: PageTreeConfig):
        """Initialize the listing client.

        Args:
            http_client: HTTPX AsyncClient whose base_url is the GitHub API
            config: Supplies owner, branch and content directory name
        """
        self.http_client = http_client
        self.owner = config.github_owner
        self.branch = config.github_branch
        self.content_root_name = config.content_root_name

    def _repo_path(self, document_id: str) -> str:
        return f"/repos/{self.owner}/{document_id}"

    async def _get(
        self,
        document_id: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Response:
        try:
            response = await self.http_client.get(url, params=params, headers=headers)
            response.raise_for_status()
        except HTTPError as e:
            logger.error(f"GitHub request failed for document {document_id}: {e}")
            raise ListingUnavailableError(document_id, str(e)) from e
        return response

    async def _get_tree(
        self, document_id: str, tree_sha: str, recursive: bool
    ) -> Dict[str, Any]:
        params = {"recursive": "1"} if recursive else None
        response = await self._get(
            document_id, f"{self._repo_path(document_id)}/git/trees/{tree_sha}", params=params
        )
        try:
            data = response.json()
        except ValueError as e:
            raise ListingUnavailableError(document_id, "malformed tree response") from e

        if not isinstance(data, dict) or not isinstance(data.get("tree"), list):
            raise ListingUnavailableError(document_id, "malformed tree response")
        if data.get("truncated"):
            logger.warning(f"GitHub truncated the tree listing for document {document_id}")
        return data

    async def fetch_listing(self, document_id: str) -> List[ListingEntry]:
        """Fetch the flat listing of the document's content directory.

        Raises:
            ListingUnavailableError: If GitHub cannot be reached, answers with an
                error, or the content directory does not exist
        """
        if not self.content_root_name:
            data = await self._get_tree(document_id, self.branch, recursive=True)
            return parse_listing(data["tree"])

        top_level = await self._get_tree(document_id, self.branch, recursive=False)
        content_dir = next(
            (
                item
                for item in top_level["tree"]
                if isinstance(item, dict)
                and item.get("path") == self.content_root_name
                and item.get("type") == EntryType.DIRECTORY.value
                and item.get("sha")
            ),
            None,
        )
        if content_dir is None:
            raise ListingUnavailableError(
                document_id, f"'{self.content_root_name}' directory not found"
            )

        content_tree = await self._get_tree(document_id, content_dir["sha"], recursive=True)
        root_entry = ListingEntry(
            path=self.content_root_name,
            type=EntryType.DIRECTORY,
            content_hash=content_dir["sha"],
        )
        entries = [root_entry, *parse_listing(content_tree["tree"], prefix=self.content_root_name)]

        logger.info(f"Fetched listing for document {document_id}: entries={len(entries)}")
        return entries

    async def fetch_content(self, document_id: str, path: str) -> str:
        """Fetch the raw text of a file on the configured branch.

        Raises:
            ListingUnavailableError: If the file cannot be retrieved
        """
        response = await self._get(
            document_id,
            f"{self._repo_path(document_id)}/contents/{path}",
            params={"ref": self.branch},
            headers={"Accept": GITHUB_RAW},
        )
        return response.text
