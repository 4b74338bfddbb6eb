"""Repository search fallback.

When a request names only a program and the default owner has no such
repository, a web search for the program name is scraped for GitHub
repository links.
"""

import re

import aiohttp

from gh_installer.constants import SEARCH_URL, SEARCH_USER_AGENT
from gh_installer.exceptions import SearchError
from gh_installer.logger import get_logger

logger = get_logger(__name__)

GITHUB_LINK_RE = re.compile(r"https://github\.com/(\w+)/(\w+)", re.ASCII)
HTTP_OK = 200


def find_repository(body: str, program: str) -> tuple[str, str] | None:
    """Pick an owner/repo pair from search result HTML.

    A link whose repository name equals the program (ignoring case) is
    preferred; otherwise the first link is used.
    """
    matches = GITHUB_LINK_RE.findall(body)
    if not matches:
        return None
    for user, repo in matches:
        if repo.lower() == program.lower():
            return user, repo
    return matches[0]


async def search_repository(
    session: aiohttp.ClientSession,
    program: str,
    search_url: str = SEARCH_URL,
) -> tuple[str, str]:
    """Search the web for the GitHub repository of a program.

    Args:
        session: Shared aiohttp session
        program: Program name to search for
        search_url: Search endpoint, queried with ``q=<program>``

    Returns:
        Tuple of (owner, repository)

    Raises:
        SearchError: If the search fails or finds no repository links

    """
    headers = {"Accept": "*/*", "User-Agent": SEARCH_USER_AGENT}
    try:
        async with session.get(
            search_url, params={"q": program}, headers=headers
        ) as resp:
            body = await resp.text(errors="replace")
            status = resp.status
    except (aiohttp.ClientError, TimeoutError) as e:
        detail = str(e) or type(e).__name__
        raise SearchError(f"search request failed: {detail}") from e

    if status != HTTP_OK:
        raise SearchError(f"search returned status {status}")

    found = find_repository(body, program)
    if found is None:
        raise SearchError(f"no github repository found for {program}")
    logger.debug("Search found %s/%s for %s", found[0], found[1], program)
    return found
