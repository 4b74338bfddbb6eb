"""Request parsing: URL path and parameters to a normalized Query.

Everything here is a pure function of the request values and the server
configuration, so it can be tested without a running server.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass

from gh_installer.config import ServerConfig
from gh_installer.constants import (
    ALIASED_PROGRAMS,
    FORMAT_RUBY,
    FORMAT_SCRIPT,
    FORMAT_TEXT,
    RESPONSE_FORMATS,
)
from gh_installer.domain.types import Query
from gh_installer.exceptions import UnknownTypeError

# /{user}/{program}[@{release}][!]; user and release are optional
PATH_RE = re.compile(
    r"^(/([\w-]{1,128}))?/([\w-]{1,128})(@([\w.-]{1,128}?))?!?$",
    re.ASCII,
)
IS_TERM_RE = re.compile(r"^(curl|wget)/", re.IGNORECASE)
IS_HOMEBREW_RE = re.compile(r"^homebrew", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class ResponseFormat:
    """How a script is rendered and served.

    Attributes:
        name: Format name as requested ("script", "ruby", ...)
        content_type: Response Content-Type
        ext: File extension, used in logs
        template: Template filename

    """

    name: str
    content_type: str
    ext: str
    template: str

    @property
    def is_script(self) -> bool:
        return self.name == FORMAT_SCRIPT


def detect_format_name(user_agent: str) -> str:
    """Infer the response format from a User-Agent header."""
    if IS_TERM_RE.match(user_agent):
        return FORMAT_SCRIPT
    if IS_HOMEBREW_RE.match(user_agent):
        return FORMAT_RUBY
    return FORMAT_TEXT


def select_format(requested: str, user_agent: str) -> ResponseFormat:
    """Choose the response format.

    An explicit ``type`` parameter wins; otherwise the User-Agent decides.

    Args:
        requested: Value of the ``type`` parameter ("" when absent)
        user_agent: Value of the User-Agent header

    Returns:
        Selected format

    Raises:
        UnknownTypeError: If an explicit type is not recognised

    """
    name = requested or detect_format_name(user_agent)
    try:
        content_type, ext, template = RESPONSE_FORMATS[name]
    except KeyError:
        raise UnknownTypeError("Unknown type") from None
    return ResponseFormat(name, content_type, ext, template)


def parse_path(path: str) -> tuple[str, str, str]:
    """Split a request path into (user, program, release).

    Parts that are absent, or a path that does not match at all, give
    empty strings.
    """
    match = PATH_RE.match(path)
    if not match:
        return "", "", ""
    return match.group(2) or "", match.group(3) or "", match.group(5) or ""


def build_query(
    path: str,
    params: Mapping[str, str],
    config: ServerConfig,
) -> Query:
    """Build the normalized Query for a request.

    Owner defaulting, in order:

    1. aliased programs (``micro``) map to their known owner
    2. otherwise the configured default user, with the search fallback
       enabled since the owner is only a guess
    3. a configured force user/repo overrides whatever the path said

    The result may still be invalid (see Query.is_valid); deciding the
    response for that is up to the caller.

    Args:
        path: URL path of the request
        params: Query-string parameters
        config: Server configuration

    Returns:
        Query for the request

    """
    user, program, release = parse_path(path)
    google = False

    if not user:
        if program in ALIASED_PROGRAMS:
            user = ALIASED_PROGRAMS[program]
        else:
            user = config.user
            google = True

    if config.force_user:
        user = config.force_user
    if config.force_repo:
        program = config.force_repo

    return Query(
        user=user,
        program=program,
        as_program=params.get("as", ""),
        release=release,
        move_to_path=path.endswith("!"),
        google=google,
        insecure=params.get("insecure") == "1",
    )
