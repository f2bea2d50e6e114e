"""OAuth 2 token endpoint."""

import base64
from typing import Any

import structlog

from dropbox_client.api.http_client import AsyncHttpClient, decode_json_response
from dropbox_client.api.request import RequestSpec, form_body
from dropbox_client.exceptions import APIError
from dropbox_client.models.auth import OAuthToken

logger = structlog.get_logger(__name__)

TOKEN_ROUTE = "/oauth2/token"


async def exchange_authorization_code(
    http: AsyncHttpClient,
    *,
    authorization_code: str,
    code_verifier: str,
    redirect_uri: str,
    client_id: str,
    client_secret: str,
) -> OAuthToken:
    """
    Exchange a PKCE authorization code for tokens.

    Args:
        http: Configured async HTTP client.
        authorization_code: Code received on the redirect URI.
        code_verifier: PKCE verifier matching the challenge sent to /oauth2/authorize.
        redirect_uri: Redirect URI used during authorization.
        client_id: App key.
        client_secret: App secret.

    Returns:
        Issued token, with a refresh token when offline access was requested.
    """
    data = await _token_request(
        http,
        {
            "code": authorization_code,
            "code_verifier": code_verifier,
            "grant_type": "authorization_code",
            "redirect_uri": redirect_uri,
        },
        client_id=client_id,
        client_secret=client_secret,
    )
    return _parse_token(data, http.config.api_url + TOKEN_ROUTE)


async def refresh_access_token(
    http: AsyncHttpClient,
    *,
    refresh_token: str,
    client_id: str,
    client_secret: str,
) -> OAuthToken:
    """
    Obtain a new short-lived access token.

    Args:
        http: Configured async HTTP client.
        refresh_token: Long-lived refresh token.
        client_id: App key.
        client_secret: App secret.

    Returns:
        Issued token. Dropbox does not rotate the refresh token, so
        ``refresh_token`` is usually absent.
    """
    data = await _token_request(
        http,
        {"grant_type": "refresh_token", "refresh_token": refresh_token},
        client_id=client_id,
        client_secret=client_secret,
    )
    return _parse_token(data, http.config.api_url + TOKEN_ROUTE)


async def _token_request(
    http: AsyncHttpClient,
    fields: dict[str, str],
    *,
    client_id: str,
    client_secret: str,
) -> dict[str, Any]:
    credentials = base64.b64encode(f"{client_id}:{client_secret}".encode()).decode("ascii")
    spec = RequestSpec(
        method="POST",
        url=http.config.api_url + TOKEN_ROUTE,
        headers={
            "Authorization": f"Basic {credentials}",
            "Content-Type": "application/x-www-form-urlencoded",
        },
        body=form_body(fields),
        body_required=True,
        authenticated=False,
    )
    logger.debug("Requesting token", grant_type=fields["grant_type"])
    response = (await http.send(spec)).unwrap()
    return decode_json_response(response, spec.url)


def _parse_token(data: dict[str, Any], endpoint: str) -> OAuthToken:
    try:
        return OAuthToken(
            access_token=data["access_token"],
            expires_in=int(data["expires_in"]),
            token_type=data.get("token_type", "bearer"),
            scope=data.get("scope"),
            refresh_token=data.get("refresh_token"),
            account_id=data.get("account_id"),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise APIError("Malformed token response", status_code=200, endpoint=endpoint) from e
