"""
Async HTTP client for the Dropbox API.

Sends requests with the current bearer token, classifies failures, and
refreshes an expired token once before re-sending.
"""

import asyncio
import json
from collections.abc import Awaitable, Callable
from typing import Any

import httpx
import structlog

from dropbox_client.api.credentials import CredentialStore
from dropbox_client.api.error_classifier import classify_error
from dropbox_client.api.outcome import Outcome
from dropbox_client.api.request import BodyProducer, RequestSpec, json_body
from dropbox_client.config import DropboxConfig
from dropbox_client.exceptions import APIError, NetworkError, RefreshError

logger = structlog.get_logger(__name__)

RefreshCallback = Callable[[], Awaitable[str]]

SENSITIVE_KEYS = frozenset(
    {
        "access_token",
        "refresh_token",
        "client_secret",
        "code",
        "code_verifier",
        "password",
        "Authorization",
    }
)


def sanitize_for_log(data: dict[str, Any]) -> dict[str, Any]:
    """
    Remove sensitive fields from a dict before logging.

    Recursively sanitizes nested dictionaries and lists.

    Args:
        data: Dictionary that may contain sensitive values.

    Returns:
        Copy with sensitive values replaced by "***".
    """
    result = {}
    for key, value in data.items():
        if key in SENSITIVE_KEYS:
            result[key] = "***"
        elif isinstance(value, dict):
            result[key] = sanitize_for_log(value)
        elif isinstance(value, list):
            result[key] = [
                sanitize_for_log(item) if isinstance(item, dict) else item for item in value
            ]
        else:
            result[key] = value
    return result


def encode_api_arg(args: dict[str, Any]) -> str:
    """
    Encode arguments for the ``Dropbox-API-Arg`` header.

    Non-ASCII characters and DEL must be sent as ``\\uXXXX`` escapes;
    ``json.dumps`` handles the former but leaves DEL as is.
    """
    return json.dumps(args, separators=(",", ":")).replace("\x7f", "\\u007f")


class AsyncHttpClient:
    """Async HTTP client for the Dropbox API."""

    def __init__(
        self,
        config: DropboxConfig,
        credentials: CredentialStore,
        *,
        refresh: RefreshCallback | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            config: Client configuration.
            credentials: Holder of the current access token.
            refresh: Coroutine function returning a new access token.
                Without it, expired-token errors are returned as-is.
            transport: Optional transport for testing (mock transport).
        """
        self._config = config
        self._credentials = credentials
        self._refresh = refresh
        self._transport = transport

        self._client: httpx.AsyncClient | None = None
        self._open_count = 0
        self._client_lock = asyncio.Lock()

    async def __aenter__(self) -> "AsyncHttpClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self._close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    timeout=self._config.timeout,
                    transport=self._transport,
                    headers={"User-Agent": self._config.user_agent},
                )
            self._open_count += 1
        return self._client

    async def _close(self) -> None:
        """Close the HTTP client once the outermost context exits."""
        async with self._client_lock:
            if self._client is None:
                logger.debug("Client not open.")
                return
            self._open_count -= 1
            if self._open_count > 0:
                logger.debug("Skipping close, client still in use", count=self._open_count)
                return
            await self._client.aclose()
            self._client = None
            self._open_count = 0

    @property
    def config(self) -> DropboxConfig:
        return self._config

    @property
    def credentials(self) -> CredentialStore:
        return self._credentials

    async def send(self, spec: RequestSpec) -> Outcome:
        """
        Send a request, refreshing an expired token at most once.

        Args:
            spec: Request to send. Its body producer is called once per attempt.

        Returns:
            SUCCESS for any status in [200, 400); API_ERROR with the classified
            error otherwise; REFRESH_ERROR if the refresh callback failed;
            TRANSPORT_ERROR on connection failures and timeouts.

        Raises:
            RuntimeError: If used outside ``async with``.
        """
        client = self._require_client()

        token = self._credentials.current if spec.authenticated else None
        outcome = await self._attempt(client, spec, token)

        error = outcome.error
        if not (isinstance(error, APIError) and error.is_expired_token):
            return outcome
        if token is None or self._refresh is None:
            logger.debug("Access token expired, no refresh available", url=spec.url)
            return outcome

        logger.debug("Access token expired, refreshing", url=spec.url)
        try:
            new_token = await self._refresh()
            self._credentials.replace(new_token)
        except Exception as e:
            logger.warning("Access token refresh failed", url=spec.url, error=str(e))
            refresh_error = RefreshError(f"Access token refresh failed: {e}", url=spec.url)
            refresh_error.__cause__ = e
            return Outcome.refresh_error(refresh_error)

        logger.debug("Access token refreshed, resending", url=spec.url)
        return await self._attempt(client, spec, new_token)

    async def _attempt(
        self,
        client: httpx.AsyncClient,
        spec: RequestSpec,
        token: str | None,
    ) -> Outcome:
        headers = dict(spec.headers)
        if token is not None:
            headers["Authorization"] = f"Bearer {token}"

        request = client.build_request(
            spec.method,
            spec.url,
            headers=headers,
            content=spec.produce_body(),
            timeout=spec.timeout if spec.timeout is not None else httpx.USE_CLIENT_DEFAULT,
        )

        try:
            response = await client.send(request, stream=spec.stream)
            if 200 <= response.status_code < 400:
                logger.debug("Request succeeded", url=spec.url, status=response.status_code)
                return Outcome.success(response)
            try:
                body = await response.aread()
            finally:
                await response.aclose()
        except httpx.TransportError as e:
            logger.debug("Request failed at transport level", url=spec.url, error=repr(e))
            network_error = NetworkError(f"{spec.method} request failed: {e!r}", url=spec.url)
            network_error.__cause__ = e
            return Outcome.transport_error(network_error)

        api_error = classify_error(response.status_code, body, endpoint=spec.url)
        logger.debug(
            "Request rejected",
            url=spec.url,
            status=api_error.status_code,
            tag=api_error.error_tag,
        )
        return Outcome.api_error(api_error)

    def _require_client(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "HTTP client not initialized. Use 'async with' first."
            raise RuntimeError(msg)
        return self._client

    async def request_json(
        self,
        route: str,
        args: dict[str, Any] | None = None,
        *,
        base_url: str | None = None,
        authenticated: bool = True,
        timeout: float | None = None,
    ) -> Any:
        """
        Call an RPC-style endpoint.

        Args:
            route: Endpoint path (e.g., "/2/files/list_folder").
            args: JSON arguments. Endpoints without arguments take no body.
            base_url: Host to call. Defaults to ``config.api_url``.
            authenticated: Whether to send the bearer token.
            timeout: Request timeout overriding the client default.

        Returns:
            Decoded JSON response.

        Raises:
            APIError: If the API rejects the request.
            RefreshError: If the token expired and could not be refreshed.
            NetworkError: On connection failures and timeouts.
        """
        headers = {}
        body = None
        if args is not None:
            headers["Content-Type"] = "application/json"
            body = json_body(args)
            logger.debug("RPC call", route=route, args=sanitize_for_log(args))

        spec = RequestSpec(
            method="POST",
            url=f"{base_url or self._config.api_url}{route}",
            headers=headers,
            body=body,
            authenticated=authenticated,
            timeout=timeout,
        )
        response = (await self.send(spec)).unwrap()
        return decode_json_response(response, spec.url)

    async def upload_content(
        self,
        route: str,
        args: dict[str, Any],
        body: BodyProducer,
        *,
        content_length: int | None = None,
    ) -> Any:
        """
        Call a content-upload endpoint.

        Args:
            route: Endpoint path (e.g., "/2/files/upload").
            args: Arguments sent in the ``Dropbox-API-Arg`` header.
            body: Producer of the raw upload bytes.
            content_length: Body length, when known ahead of streaming.

        Returns:
            Decoded JSON response.
        """
        headers = {
            "Dropbox-API-Arg": encode_api_arg(args),
            "Content-Type": "application/octet-stream",
        }
        if content_length is not None:
            headers["Content-Length"] = str(content_length)
        logger.debug("Upload call", route=route, args=sanitize_for_log(args))

        spec = RequestSpec(
            method="POST",
            url=f"{self._config.content_url}{route}",
            headers=headers,
            body=body,
            body_required=True,
        )
        response = (await self.send(spec)).unwrap()
        return decode_json_response(response, spec.url)

    async def download_content(
        self,
        route: str,
        args: dict[str, Any],
        *,
        stream: bool = False,
    ) -> tuple[dict[str, Any], httpx.Response]:
        """
        Call a content-download endpoint.

        Args:
            route: Endpoint path (e.g., "/2/files/download").
            args: Arguments sent in the ``Dropbox-API-Arg`` header.
            stream: Leave the body unread. The caller must ``aclose()`` the response.

        Returns:
            Result metadata from the ``Dropbox-API-Result`` header and the response.
        """
        logger.debug("Download call", route=route, args=sanitize_for_log(args))
        spec = RequestSpec(
            method="POST",
            url=f"{self._config.content_url}{route}",
            headers={"Dropbox-API-Arg": encode_api_arg(args)},
            stream=stream,
        )
        response = (await self.send(spec)).unwrap()

        raw_result = response.headers.get("Dropbox-API-Result")
        try:
            result = json.loads(raw_result) if raw_result else None
        except ValueError:
            result = None
        if not isinstance(result, dict):
            if stream:
                await response.aclose()
            raise APIError(
                "Missing or invalid Dropbox-API-Result header",
                status_code=response.status_code,
                endpoint=spec.url,
            )
        return result, response


def decode_json_response(response: httpx.Response, url: str) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise APIError(
            "Invalid JSON response from API",
            status_code=response.status_code,
            endpoint=url,
        ) from e
