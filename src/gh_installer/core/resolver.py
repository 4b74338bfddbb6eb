"""Release resolution with caching.

Turns a validated Query into a Result: finds the requested release on
GitHub, classifies its assets by platform and memoizes the outcome.
Failures are raised to the caller and never cached, so the next request
for the same query retries from scratch.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING

from gh_installer.constants import SEARCH_URL
from gh_installer.core.cache import ResultCache
from gh_installer.core.github.models import GitHubAsset, GitHubRelease
from gh_installer.core.search import search_repository
from gh_installer.domain.asset import (
    checksum_for,
    classify,
    is_checksum_file,
    parse_checksums,
    select_assets,
)
from gh_installer.domain.types import Asset, Assets, Query, Result
from gh_installer.exceptions import (
    NotFoundError,
    ResolutionError,
    SearchError,
    UpstreamError,
)
from gh_installer.logger import get_logger
from gh_installer.utils.datetime_utils import get_current_datetime_local

if TYPE_CHECKING:
    from gh_installer.core.github.client import GitHubClient

logger = get_logger(__name__)

LATEST = "latest"


class ReleaseResolver:
    """Resolve queries to release assets, with caching.

    Usage:
        resolver = ReleaseResolver(client, cache=ResultCache())
        result = await resolver.execute(query)
    """

    def __init__(
        self,
        client: GitHubClient,
        cache: ResultCache | None = None,
        search_url: str = SEARCH_URL,
        clock: Callable[[], datetime] = get_current_datetime_local,
    ) -> None:
        """Initialize the resolver.

        Args:
            client: GitHub API client
            cache: Result cache (a private one is created when omitted)
            search_url: Endpoint for the owner search fallback
            clock: Source of resolution timestamps

        """
        self.client = client
        self.cache = cache if cache is not None else ResultCache()
        self.search_url = search_url
        self.clock = clock

    async def execute(self, query: Query) -> Result:
        """Return the Result for a query, from cache when fresh.

        On a miss the release is resolved upstream. If the repository is
        not found and the owner was only a default guess, a search for
        the program picks a new owner and resolution is tried once more.

        The result is stored under the key of the query as requested, so
        later identical requests hit the cache even though the stored
        Result carries the discovered tag and owner.

        Raises:
            UpstreamError: If resolution fails (NotFoundError and
                ResolutionError included)

        """
        cached, found = self.cache.lookup(query)
        if found and cached is not None:
            return cached

        timestamp = self.clock()
        resolved = query
        try:
            tag, assets = await self.fetch_assets(resolved)
        except NotFoundError:
            if not query.google:
                raise
            resolved = await self._search_owner(query)
            if resolved is None:
                raise
            tag, assets = await self.fetch_assets(resolved)

        resolved = replace(resolved, google=False)
        if not resolved.release and tag:
            logger.info("detected release: %s", tag)
            resolved = replace(resolved, release=tag)

        result = Result.build(resolved, timestamp, assets)
        self.cache.store(query, result)
        return result

    async def _search_owner(self, query: Query) -> Query | None:
        """Find the owner of a program by search, or None on failure."""
        try:
            user, program = await search_repository(
                self.client.session, query.program, self.search_url
            )
        except SearchError as e:
            logger.warning("search failed: %s", e)
            return None

        logger.info("search found: %s/%s", user, program)
        if program != query.program:
            logger.warning(
                "program mismatch: got %s: expected %s",
                query.program,
                program,
            )
        return replace(query, user=user, program=program)

    async def fetch_release(self, query: Query) -> GitHubRelease:
        """Fetch the release a query asks for.

        The latest release is looked up directly; a pinned tag is searched
        for in the repository's release listing.

        Raises:
            NotFoundError: If the repository (or latest release) is missing
            ResolutionError: If the pinned tag is not listed
            UpstreamError: On any other upstream failure

        """
        url = self.client.releases_url(query.user, query.program)
        release = query.release
        logger.info(
            "fetching asset info for %s/%s@%s",
            query.user,
            query.program,
            release,
        )

        try:
            if not release or release == LATEST:
                data = await self.client.get_json(f"{url}/latest")
                return GitHubRelease.from_api_response(data)

            data = await self.client.get_json(url)
            if not isinstance(data, list):
                raise UpstreamError(f"unexpected release listing: {url}")
            for entry in data:
                if isinstance(entry, dict) and entry.get("tag_name") == release:
                    return GitHubRelease.from_api_response(entry)
        except TypeError as e:
            raise UpstreamError(f"unexpected release data: {url}: {e}") from e

        raise ResolutionError(f"release tag '{release}' not found")

    async def fetch_checksums(
        self, gh_assets: tuple[GitHubAsset, ...]
    ) -> dict[str, str]:
        """Download and index the first published checksum list.

        Missing or unreadable checksum files give an empty index.
        """
        for gh_asset in gh_assets:
            if not is_checksum_file(gh_asset.name):
                continue
            try:
                text = await self.client.get_text(
                    gh_asset.browser_download_url
                )
            except UpstreamError as e:
                logger.warning(
                    "checksum download failed: %s: %s", gh_asset.name, e
                )
                return {}
            return parse_checksums(text)
        return {}

    async def fetch_assets(self, query: Query) -> tuple[str, Assets]:
        """Fetch and classify the assets of the release a query names.

        Returns:
            Tuple of (release tag, selected assets)

        Raises:
            NotFoundError: If the repository is missing
            ResolutionError: If the release has nothing installable

        """
        release = await self.fetch_release(query)
        if not release.assets:
            raise ResolutionError("no assets found")

        sums = await self.fetch_checksums(release.assets)
        assets = select_assets(self._classify_assets(release.assets, sums))
        if not assets:
            raise ResolutionError("no downloads found for this release")

        for asset in assets:
            logger.debug("including asset: %s (%s)", asset.name, asset.key())
        return release.tag_name, assets

    @staticmethod
    def _classify_assets(
        gh_assets: tuple[GitHubAsset, ...], sums: dict[str, str]
    ) -> list[Asset]:
        """Classify assets, dropping unsupported ones, in listing order."""
        candidates = []
        for gh_asset in gh_assets:
            url = gh_asset.browser_download_url
            os_name, arch, file_type = classify(
                gh_asset.name, url, gh_asset.size
            )
            if not file_type:
                logger.debug(
                    "fetched asset has unsupported file type: %s",
                    gh_asset.name,
                )
                continue
            if os_name == "windows":
                logger.debug("fetched asset is for windows: %s", gh_asset.name)
                continue
            if not os_name:
                logger.debug("fetched asset has unknown os: %s", gh_asset.name)
                continue
            candidates.append(
                Asset(
                    name=gh_asset.name,
                    os=os_name,
                    arch=arch,
                    url=url,
                    type=file_type,
                    sha256=checksum_for(
                        gh_asset.name, sums, gh_asset.digest
                    ),
                )
            )
        return candidates
