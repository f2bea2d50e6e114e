"""
OAuth service for Dropbox.

Exchanges authorization codes for tokens and turns a refresh token into
the refresh callback used by the HTTP client.
"""

import structlog

from dropbox_client.api.endpoints.oauth import (
    exchange_authorization_code,
    refresh_access_token,
)
from dropbox_client.api.http_client import AsyncHttpClient, RefreshCallback
from dropbox_client.models.auth import OAuthToken

logger = structlog.get_logger(__name__)


class AuthService:
    """
    Talks to the OAuth 2 token endpoint on behalf of one app.

    The app secret is sent with every token request using HTTP Basic auth.
    """

    def __init__(self, http: AsyncHttpClient, client_id: str, client_secret: str) -> None:
        """
        Args:
            http: HTTP client for API requests.
            client_id: App key.
            client_secret: App secret.
        """
        if not client_id or not client_secret:
            msg = "client_id and client_secret are required"
            raise ValueError(msg)
        self._http = http
        self._client_id = client_id
        self._client_secret = client_secret

    async def exchange_code(
        self, authorization_code: str, code_verifier: str, redirect_uri: str
    ) -> OAuthToken:
        """
        Complete the PKCE authorization flow.

        Args:
            authorization_code: Code received on the redirect URI.
            code_verifier: PKCE verifier.
            redirect_uri: Redirect URI used during authorization.

        Returns:
            Issued token.
        """
        token = await exchange_authorization_code(
            self._http,
            authorization_code=authorization_code,
            code_verifier=code_verifier,
            redirect_uri=redirect_uri,
            client_id=self._client_id,
            client_secret=self._client_secret,
        )
        logger.info("Authorization code exchanged", expires_in=token.expires_in)
        return token

    async def refresh(self, refresh_token: str) -> OAuthToken:
        """Obtain a new access token from a refresh token."""
        token = await refresh_access_token(
            self._http,
            refresh_token=refresh_token,
            client_id=self._client_id,
            client_secret=self._client_secret,
        )
        logger.debug("Access token refreshed", expires_in=token.expires_in)
        return token

    def refresh_callback(self, refresh_token: str) -> RefreshCallback:
        """
        Build the callback the HTTP client invokes when a token expires.

        Args:
            refresh_token: Long-lived refresh token.

        Returns:
            Coroutine function returning a new access token.
        """

        async def _refresh() -> str:
            return (await self.refresh(refresh_token)).access_token

        return _refresh
