"""GitHub connector."""

from owners_audit.github.base import BaseConnector
from owners_audit.github.connector import GitHubConnector
from owners_audit.github.schemas import GitHubContent, GitHubRepository, GitHubUser

__all__ = [
    "BaseConnector",
    "GitHubConnector",
    "GitHubContent",
    "GitHubRepository",
    "GitHubUser",
]
