"""Clients for the services that supply listings and file bodies."""

from page_tree.clients.base import ListingClient
from page_tree.clients.github import GitHubListingClient, get_client

__all__ = [
    "ListingClient",
    "GitHubListingClient",
    "get_client",
]
