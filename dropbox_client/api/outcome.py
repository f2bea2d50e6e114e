"""
Result of dispatching a request.

``AsyncHttpClient.send`` never raises for API, refresh or transport
failures; it returns an Outcome and callers branch on ``kind``.
"""

from dataclasses import dataclass
from enum import StrEnum

import httpx

from dropbox_client.exceptions import APIError, DropboxError, NetworkError, RefreshError


class OutcomeKind(StrEnum):
    """How a dispatched request ended."""

    SUCCESS = "success"
    API_ERROR = "api_error"
    REFRESH_ERROR = "refresh_error"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True, slots=True)
class Outcome:
    """
    Exactly one of a response or an error.

    Attributes:
        kind: Discriminator.
        response: Set when ``kind`` is SUCCESS.
        error: Set for every other kind.
    """

    kind: OutcomeKind
    response: httpx.Response | None = None
    error: DropboxError | None = None

    @classmethod
    def success(cls, response: httpx.Response) -> "Outcome":
        return cls(OutcomeKind.SUCCESS, response=response)

    @classmethod
    def api_error(cls, error: APIError) -> "Outcome":
        return cls(OutcomeKind.API_ERROR, error=error)

    @classmethod
    def refresh_error(cls, error: RefreshError) -> "Outcome":
        return cls(OutcomeKind.REFRESH_ERROR, error=error)

    @classmethod
    def transport_error(cls, error: NetworkError) -> "Outcome":
        return cls(OutcomeKind.TRANSPORT_ERROR, error=error)

    @property
    def ok(self) -> bool:
        return self.kind == OutcomeKind.SUCCESS

    def unwrap(self) -> httpx.Response:
        """
        Return the response, or raise the carried error.

        Raises:
            APIError: For API_ERROR.
            RefreshError: For REFRESH_ERROR.
            NetworkError: For TRANSPORT_ERROR.
        """
        if self.kind == OutcomeKind.SUCCESS and self.response is not None:
            return self.response
        if self.error is None:
            msg = f"Outcome {self.kind} carries no error"
            raise RuntimeError(msg)
        raise self.error
