"""HTTP session utilities for gh-installer.

One ClientSession is shared by every request the server handles.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiohttp

from gh_installer import __version__


@asynccontextmanager
async def create_http_session() -> AsyncIterator[aiohttp.ClientSession]:
    """Create the shared upstream HTTP session.

    Transport defaults are kept: no request timeout beyond aiohttp's own
    and no connection limit tuning.

    Yields:
        Configured aiohttp.ClientSession

    """
    async with aiohttp.ClientSession(
        headers={"User-Agent": f"gh-installer/{__version__}"},
    ) as session:
        yield session
