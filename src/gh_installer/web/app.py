"""aiohttp application wiring.

The application owns one upstream HTTP session and one result cache for
its whole lifetime; the session is opened on startup and closed on
cleanup.
"""

from collections.abc import AsyncIterator

from aiohttp import web

from gh_installer.config import ServerConfig
from gh_installer.core.cache import ResultCache
from gh_installer.core.github import GitHubClient
from gh_installer.core.http_session import create_http_session
from gh_installer.core.resolver import ReleaseResolver
from gh_installer.logger import get_logger
from gh_installer.render import ScriptRenderer
from gh_installer.web.handler import RESOLVER_KEY, InstallHandler

logger = get_logger(__name__)

CACHE_KEY = web.AppKey("cache", ResultCache)


def create_app(
    config: ServerConfig,
    cache: ResultCache | None = None,
    renderer: ScriptRenderer | None = None,
) -> web.Application:
    """Create the installer web application.

    Args:
        config: Server configuration; the token is used as given
        cache: Result cache (a fresh one when omitted)
        renderer: Script renderer (the packaged templates when omitted)

    Returns:
        Configured application

    """
    app = web.Application()
    app[CACHE_KEY] = cache if cache is not None else ResultCache()

    async def upstream_ctx(app: web.Application) -> AsyncIterator[None]:
        async with create_http_session() as session:
            client = GitHubClient(
                session, token=config.token, api_url=config.api_url
            )
            app[RESOLVER_KEY] = ReleaseResolver(
                client,
                cache=app[CACHE_KEY],
                search_url=config.search_url,
            )
            logger.debug("Upstream session opened (%s)", config.api_url)
            yield

    app.cleanup_ctx.append(upstream_ctx)

    handler = InstallHandler(config, renderer)
    app.router.add_get("/healthz", handler.healthz)
    app.router.add_get("/{path:.*}", handler.handle)
    return app
