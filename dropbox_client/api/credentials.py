"""Holder for the current bearer token."""

import threading


class CredentialStore:
    """
    Owns the access token shared by every request of a client.

    Reads are lock-free. Writes swap the value under a short lock that is
    never held across I/O, so concurrent requests are not serialised and two
    requests that both see an expired token may both refresh; the last
    replacement wins.
    """

    def __init__(self, access_token: str) -> None:
        self._token = _validate(access_token)
        self._write_lock = threading.Lock()

    @property
    def current(self) -> str:
        """Return the token to use for the next request."""
        return self._token

    def replace(self, access_token: str) -> str:
        """
        Install a new token.

        Args:
            access_token: Fresh bearer token.

        Returns:
            The token that was replaced.
        """
        token = _validate(access_token)
        with self._write_lock:
            previous, self._token = self._token, token
        return previous


def _validate(access_token: str) -> str:
    if not isinstance(access_token, str) or not access_token:
        msg = "access_token must be a non-empty string"
        raise ValueError(msg)
    return access_token
