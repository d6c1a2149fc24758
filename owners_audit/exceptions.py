"""Errors raised by the retrieval and orchestration layers.

The parsing engine in ``owners_audit.ownership`` never raises; everything
here belongs to the boundary with GitHub.
"""


class OwnersAuditError(Exception):
    """Base class for all auditor errors."""


class ConfigurationError(OwnersAuditError):
    """Raised when a required setting is missing or invalid."""


class RetrievalError(OwnersAuditError):
    """Raised when data cannot be fetched from GitHub.

    Attributes:
        message: Human-readable description
        status_code: HTTP status of the failed response, if any
        url: Requested URL, if known
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        url: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.url = url

    def to_dict(self) -> dict:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "status_code": self.status_code,
            "url": self.url,
        }


class ContentNotFoundError(RetrievalError):
    """Raised when a requested file does not exist in a repository."""
