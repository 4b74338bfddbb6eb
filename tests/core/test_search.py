"""Tests for the repository search fallback."""

import aiohttp
import pytest
from aioresponses import aioresponses

from gh_installer.core.search import find_repository, search_repository
from gh_installer.exceptions import SearchError

SEARCH = "https://search.test/search"


class TestFindRepository:
    """Test link extraction from search results."""

    def test_exact_match_preferred(self):
        """Test a link for the program itself beats earlier links."""
        body = (
            "https://github.com/a/unrelated "
            "https://github.com/zyedidia/Micro "
            "https://github.com/b/micro"
        )
        assert find_repository(body, "micro") == ("zyedidia", "Micro")

    def test_first_link_fallback(self):
        """Test the first link is used without an exact match."""
        body = "https://github.com/a/one https://github.com/b/two"
        assert find_repository(body, "three") == ("a", "one")

    def test_no_links(self):
        """Test pages without GitHub links give nothing."""
        assert find_repository("<html></html>", "micro") is None


@pytest.mark.asyncio
class TestSearchRepository:
    """Test the search request."""

    async def test_search(self):
        """Test the program is sent as the q parameter."""
        async with aiohttp.ClientSession() as session:
            with aioresponses() as m:
                m.get(f"{SEARCH}?q=serve", body="https://github.com/jpillora/serve")
                found = await search_repository(session, "serve", SEARCH)

        assert found == ("jpillora", "serve")

    async def test_search_nothing_found(self):
        """Test an empty result page raises SearchError."""
        async with aiohttp.ClientSession() as session:
            with aioresponses() as m:
                m.get(f"{SEARCH}?q=serve", body="no results")
                with pytest.raises(SearchError, match="no github repository"):
                    await search_repository(session, "serve", SEARCH)

    async def test_search_transport_failure(self):
        """Test connection failures raise SearchError."""
        async with aiohttp.ClientSession() as session:
            with aioresponses() as m:
                m.get(
                    f"{SEARCH}?q=serve",
                    exception=aiohttp.ClientConnectionError("down"),
                )
                with pytest.raises(SearchError, match="search request failed"):
                    await search_repository(session, "serve", SEARCH)

    async def test_search_timeout(self):
        """Test a timed out search raises SearchError."""
        async with aiohttp.ClientSession() as session:
            with aioresponses() as m:
                m.get(f"{SEARCH}?q=serve", exception=TimeoutError())
                with pytest.raises(SearchError, match="TimeoutError"):
                    await search_repository(session, "serve", SEARCH)
