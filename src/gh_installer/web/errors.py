"""Error responses safe to embed in install scripts.

Error text can carry upstream or request-controlled content (URLs,
program names), so it is reduced to a small character set before it is
written into a response that may be piped straight into a shell.
"""

import re

from aiohttp import web

ERROR_MESSAGE_RE = re.compile(r"[^A-Za-z0-9 :/.]")


def sanitize(message: str) -> str:
    """Remove every character outside ``[A-Za-z0-9 :/.]``."""
    return ERROR_MESSAGE_RE.sub("", message)


def error_body(message: str, as_script: bool) -> str:
    """Format a sanitized error body.

    Shell responses wrap the message in ``echo`` so that piping the
    response into ``sh`` prints the error instead of failing to parse.
    """
    cleaned = sanitize(message)
    if as_script:
        cleaned = f"echo '{cleaned}'"
    return cleaned + "\n"


def error_response(message: str, status: int, as_script: bool) -> web.Response:
    """Build a plain-text error response."""
    return web.Response(
        text=error_body(message, as_script),
        status=status,
        content_type="text/plain",
        headers={"X-Content-Type-Options": "nosniff"},
    )
