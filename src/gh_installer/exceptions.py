"""Exception classes for gh-installer operations.

Every error raised while serving a request derives from InstallerError and
carries the HTTP status it should be reported with.
"""


class InstallerError(Exception):
    """Base exception for gh-installer operations."""

    status: int = 500

    def __init__(self, message: str) -> None:
        """Initialize error with a message.

        Args:
            message: Error message describing the failure.

        """
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        """Return the error message."""
        return self.message


class InvalidQueryError(InstallerError):
    """Raised when the request path does not describe a repository."""

    status = 400


class UnknownTypeError(InstallerError):
    """Raised when an explicit response type is not recognised.

    Reported as 500 to stay compatible with existing callers.
    """

    status = 500


class UpstreamError(InstallerError):
    """Raised when the GitHub API request fails or returns bad data."""

    status = 502


class NotFoundError(UpstreamError):
    """Raised when the GitHub API answers 404."""


class ResolutionError(UpstreamError):
    """Raised when a release exists but yields nothing installable."""


class SearchError(InstallerError):
    """Raised when the repository search fallback finds nothing."""

    status = 502


class RenderError(InstallerError):
    """Raised when a script template fails to load or execute."""

    status = 500
