"""Low-level GitHub API client.

Issues exactly one GET per call and maps the response status onto the
gh_installer exception hierarchy. There is no retry or backoff: failures
are reported to the caller, which surfaces them to the user.
"""

from typing import Any

import aiohttp
import orjson

from gh_installer.constants import (
    GITHUB_ACCEPT,
    GITHUB_API_URL,
    RATE_LIMIT_WARNING_THRESHOLD,
)
from gh_installer.exceptions import NotFoundError, UpstreamError
from gh_installer.logger import get_logger

logger = get_logger(__name__)

HTTP_OK = 200
HTTP_NOT_FOUND = 404


class GitHubClient:
    """Authenticated GET requests against the GitHub API."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        token: str = "",
        api_url: str = GITHUB_API_URL,
    ) -> None:
        """Initialize the API client.

        Args:
            session: Shared aiohttp session
            token: API token; anonymous requests when empty
            api_url: Base URL of the API

        """
        self.session = session
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.remaining_requests: int | None = None
        self.rate_limit_reset: int | None = None

    def headers(self) -> dict[str, str]:
        """Return request headers, including auth when a token is set."""
        headers = {"Accept": GITHUB_ACCEPT}
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    def releases_url(self, owner: str, repo: str) -> str:
        return f"{self.api_url}/repos/{owner}/{repo}/releases"

    def _update_rate_limit_info(self, headers: Any) -> None:
        """Record rate-limit headers and warn when running low."""
        remaining = headers.get("X-RateLimit-Remaining")
        if remaining is None:
            return
        try:
            self.remaining_requests = int(remaining)
            self.rate_limit_reset = int(headers.get("X-RateLimit-Reset", 0))
        except (TypeError, ValueError):
            logger.warning("Invalid rate limit headers received")
            return
        if self.remaining_requests < RATE_LIMIT_WARNING_THRESHOLD:
            logger.warning(
                "GitHub rate limit low: %d requests remaining (reset %d)",
                self.remaining_requests,
                self.rate_limit_reset,
            )

    async def _get(self, url: str, headers: dict[str, str]) -> bytes:
        """GET a URL and return the body of a 200 response.

        Raises:
            NotFoundError: On 404
            UpstreamError: On transport failure or any other status

        """
        try:
            async with self.session.get(url, headers=headers) as resp:
                self._update_rate_limit_info(resp.headers)
                body = await resp.read()
                status = resp.status
                reason = resp.reason or ""
        except (aiohttp.ClientError, TimeoutError) as e:
            detail = str(e) or type(e).__name__
            raise UpstreamError(f"request failed: {url}: {detail}") from e

        if status == HTTP_NOT_FOUND:
            raise NotFoundError(f"not found: url {url}")
        if status != HTTP_OK:
            text = body.decode("utf-8", errors="replace")
            raise UpstreamError(f"{reason} {text}")
        return body

    async def get_json(self, url: str) -> Any:
        """GET a URL and decode its JSON body.

        Raises:
            NotFoundError: On 404
            UpstreamError: On any other failure, including invalid JSON

        """
        body = await self._get(url, self.headers())
        try:
            return orjson.loads(body)
        except orjson.JSONDecodeError as e:
            raise UpstreamError(f"download failed: {url}: {e}") from e

    async def get_text(self, url: str) -> str:
        """GET a URL and return its body as text (e.g. checksum lists).

        Release downloads are public, so the API token is not sent.
        """
        body = await self._get(url, {})
        return body.decode("utf-8", errors="replace")
