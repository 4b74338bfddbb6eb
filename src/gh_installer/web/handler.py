"""Request handler serving install scripts.

Per request: pick the response format, build the Query, resolve it to a
Result (through the cache), render the script and write it out. Every
failure ends the request with a sanitized error response; nothing is
retried and no partial script is ever served.
"""

from aiohttp import web

from gh_installer.config import ServerConfig
from gh_installer.constants import PROJECT_HOME_URL
from gh_installer.core.query import ResponseFormat, build_query, select_format
from gh_installer.core.resolver import ReleaseResolver
from gh_installer.exceptions import InstallerError, InvalidQueryError
from gh_installer.logger import get_logger
from gh_installer.render import ScriptRenderer
from gh_installer.web.errors import error_response

logger = get_logger(__name__)

RESOLVER_KEY = web.AppKey("resolver", ReleaseResolver)


class InstallHandler:
    """Serve install scripts for GitHub releases."""

    def __init__(
        self,
        config: ServerConfig,
        renderer: ScriptRenderer | None = None,
    ) -> None:
        """Initialize the handler.

        Args:
            config: Server configuration (default/forced owner and repo)
            renderer: Script renderer (a default one is created if omitted)

        """
        self.config = config
        self.renderer = renderer or ScriptRenderer()

    async def healthz(self, request: web.Request) -> web.Response:
        """Liveness check."""
        return web.Response(text="OK")

    async def handle(self, request: web.Request) -> web.StreamResponse:
        """Serve the install script for the requested path."""
        user_agent = request.headers.get("User-Agent", "")
        try:
            fmt = select_format(request.query.get("type", ""), user_agent)
        except InstallerError as e:
            return error_response(e.message, e.status, as_script=False)

        try:
            return await self._serve(request, fmt)
        except InstallerError as e:
            if e.status >= 500:
                logger.warning(
                    "request %s failed: %s: %s",
                    request.path,
                    type(e).__name__,
                    e,
                )
            return error_response(e.message, e.status, fmt.is_script)

    async def _serve(
        self, request: web.Request, fmt: ResponseFormat
    ) -> web.Response:
        query = build_query(request.path, request.query, self.config)
        if not query.is_valid():
            if request.path == "/":
                raise web.HTTPMovedPermanently(location=PROJECT_HOME_URL)
            raise InvalidQueryError("Invalid path")

        resolver = request.app[RESOLVER_KEY]
        result = await resolver.execute(query)
        body = self.renderer.render(fmt.template, result)

        resolved = result.query
        logger.info(
            "serving script %s/%s@%s (%s)",
            resolved.user,
            resolved.program,
            resolved.release,
            fmt.ext,
        )
        return web.Response(body=body, content_type=fmt.content_type)
