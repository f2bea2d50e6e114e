"""
Dropbox client exception hierarchy.

All exceptions inherit from DropboxError for easy catching.
"""

from typing import Any

EXPIRED_ACCESS_TOKEN_TAG = "expired_access_token"


class DropboxError(Exception):
    """Base exception for all dropbox_client errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class AuthenticationError(DropboxError):
    """Authentication failed."""


class RefreshError(AuthenticationError):
    """The access token expired and obtaining a new one failed."""


class APIError(DropboxError):
    """
    Request rejected by the Dropbox API.

    Attributes:
        status_code: HTTP status of the rejected response.
        error_summary: Human-readable summary from the error body, if parseable.
        error_tag: Machine-readable ``.tag`` of the nested error, if parseable.
        endpoint: URL of the failed request, when known.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        error_summary: str | None = None,
        error_tag: str | None = None,
        endpoint: str | None = None,
    ) -> None:
        super().__init__(
            message,
            status_code=status_code,
            error_tag=error_tag,
            endpoint=endpoint,
        )
        self.status_code = status_code
        self.error_summary = error_summary
        self.error_tag = error_tag
        self.endpoint = endpoint

    @property
    def is_expired_token(self) -> bool:
        """Whether this is the one error that warrants a token refresh."""
        return self.status_code == 401 and self.error_tag == EXPIRED_ACCESS_TOKEN_TAG


class NetworkError(DropboxError):
    """Network-level error (connection failed, timeout)."""


class IntegrityError(DropboxError):
    """Downloaded content does not match the server's content hash."""

    def __init__(self, message: str, *, expected: str, actual: str) -> None:
        super().__init__(message, expected=expected, actual=actual)
        self.expected = expected
        self.actual = actual
