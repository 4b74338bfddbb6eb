"""GitHub release payload models.

Only the fields the resolver needs are kept from the API responses.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class GitHubAsset:
    """A release asset as listed by the GitHub API.

    Attributes:
        name: Asset filename
        size: Asset size in bytes
        digest: Asset digest, ``sha256:<hex>`` (may be empty)
        browser_download_url: Direct download URL for the asset

    """

    name: str
    size: int
    digest: str
    browser_download_url: str

    @classmethod
    def from_api_response(
        cls, asset_data: dict[str, Any]
    ) -> "GitHubAsset | None":
        """Create a GitHubAsset from API data.

        Returns:
            Asset instance or None if required fields are missing

        """
        if not isinstance(asset_data, dict):
            return None
        name = asset_data.get("name") or ""
        download_url = asset_data.get("browser_download_url") or ""
        if not name or not download_url:
            return None
        try:
            size = int(asset_data.get("size") or 0)
        except (TypeError, ValueError):
            size = 0
        return cls(
            name=name,
            size=size,
            digest=asset_data.get("digest") or "",
            browser_download_url=download_url,
        )


@dataclass(slots=True, frozen=True)
class GitHubRelease:
    """A release as listed by the GitHub API.

    Attributes:
        tag_name: Release tag
        assets: Assets in upstream listing order

    """

    tag_name: str
    assets: tuple[GitHubAsset, ...]

    @classmethod
    def from_api_response(cls, api_data: dict[str, Any]) -> "GitHubRelease":
        """Create a GitHubRelease from API data.

        Malformed asset entries are dropped.

        Raises:
            TypeError: If api_data is not a JSON object

        """
        if not isinstance(api_data, dict):
            msg = f"expected release object, got {type(api_data).__name__}"
            raise TypeError(msg)
        assets = []
        for asset_data in api_data.get("assets") or []:
            asset = GitHubAsset.from_api_response(asset_data)
            if asset:
                assets.append(asset)
        return cls(tag_name=api_data.get("tag_name") or "", assets=tuple(assets))
