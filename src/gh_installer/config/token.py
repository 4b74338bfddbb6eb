"""GitHub token lookup and validation.

The API token normally comes from settings.conf or ``GITHUB_TOKEN``. When
neither is set, the system keyring is consulted so a workstation
deployment can keep the token out of plain-text files.
"""

import re

import keyring
from keyring.errors import KeyringError

from gh_installer.constants import KEYRING_SERVICE, KEYRING_USERNAME
from gh_installer.logger import get_logger

logger = get_logger(__name__)

MAX_TOKEN_LENGTH: int = 255

_TOKEN_PATTERNS = (
    r"^[a-f0-9]{40}$",  # legacy personal access tokens
    r"^ghp_[A-Za-z0-9_]{36,251}$",
    r"^gho_[A-Za-z0-9_]{36,251}$",
    r"^ghu_[A-Za-z0-9_]{36,251}$",
    r"^ghs_[A-Za-z0-9_]{36,251}$",
    r"^ghr_[A-Za-z0-9_]{36,251}$",
    r"^github_pat_[A-Za-z0-9_]{36,243}$",
)


def validate_github_token(token: str | None) -> bool:
    """Check whether a token looks like a GitHub token.

    Supports classic 40-character hex tokens and the prefixed formats
    (``ghp_``, ``gho_``, ``ghu_``, ``ghs_``, ``ghr_``, ``github_pat_``).

    Args:
        token: Token to validate

    Returns:
        True if the token format is valid

    """
    if not token or not isinstance(token, str):
        return False
    token = token.strip()
    if not token or len(token) > MAX_TOKEN_LENGTH:
        return False
    return any(re.match(pattern, token) for pattern in _TOKEN_PATTERNS)


class KeyringTokenStore:
    """Read-only access to a token saved in the system keyring."""

    def __init__(
        self,
        service: str = KEYRING_SERVICE,
        username: str = KEYRING_USERNAME,
    ) -> None:
        self.service = service
        self.username = username

    def get(self) -> str:
        """Return the stored token, or an empty string.

        Keyring backends that are unavailable (headless hosts, containers)
        are treated as holding no token.
        """
        try:
            token = keyring.get_password(self.service, self.username)
        except KeyringError as e:
            logger.debug("Keyring unavailable: %s", e)
            return ""
        return token or ""


def resolve_token(
    configured: str, store: KeyringTokenStore | None = None
) -> str:
    """Pick the API token to use.

    Args:
        configured: Token from settings or environment (may be empty)
        store: Keyring store consulted when no token is configured

    Returns:
        Token, or an empty string for anonymous access

    """
    token = configured.strip()
    if not token:
        token = (store or KeyringTokenStore()).get()
        if token:
            logger.debug("Using GitHub token from keyring")

    if not token:
        logger.info(
            "No GitHub token configured. API rate limits apply "
            "(60 requests/hour)."
        )
    elif not validate_github_token(token):
        logger.warning("GitHub token has an unexpected format")
    return token
