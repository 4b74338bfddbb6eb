"""GitHub infrastructure - API client and release payload models."""

from gh_installer.core.github.client import GitHubClient
from gh_installer.core.github.models import GitHubAsset, GitHubRelease

__all__ = [
    "GitHubAsset",
    "GitHubClient",
    "GitHubRelease",
]
