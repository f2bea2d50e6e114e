"""
Dropbox client facade.

This is the main entry point for users of the library. It provides a clean,
high-level API that hides the complexity of the underlying services.
"""

import asyncio
from collections.abc import AsyncGenerator
from datetime import datetime
from pathlib import Path
from typing import Any, Self

import httpx
import structlog

from dropbox_client.api.credentials import CredentialStore
from dropbox_client.api.endpoints.users import get_current_account
from dropbox_client.api.http_client import AsyncHttpClient, RefreshCallback
from dropbox_client.config import DropboxConfig
from dropbox_client.core.content_hash import content_hash
from dropbox_client.models.account import Account
from dropbox_client.models.files import (
    DownloadedFile,
    FileMetadata,
    ListFolderResult,
    LongpollResult,
    Metadata,
    WriteMode,
)
from dropbox_client.services.auth_service import AuthService
from dropbox_client.services.file_service import FileService
from dropbox_client.services.folder_service import FolderService

logger = structlog.get_logger(__name__)


class DropboxClient:
    """
    Async client for Dropbox.

    Example:
        ```python
        async with DropboxClient(
            access_token,
            refresh_token=refresh_token,
            app_key="app-key",
            app_secret="app-secret",
        ) as client:
            async for entry in client.iter_folder(""):
                print(entry.name)

            await client.upload("/notes.txt", data=b"hello")
            await client.download_to_file("/notes.txt", "notes.txt")
        ```

    When the access token expires, it is refreshed once per request and the
    request is re-sent. A refresh callback can be given directly, or built
    from ``refresh_token`` with ``app_key`` and ``app_secret``.

    Args:
        access_token: Current bearer token.
        refresh_token: Long-lived token used to obtain new access tokens.
        app_key: App key, required with ``refresh_token``.
        app_secret: App secret, required with ``refresh_token``.
        refresh_callback: Coroutine function returning a new access token.
        config: Client configuration. Uses defaults if not provided.
        transport: Optional httpx transport for testing (mock transport).
    """

    def __init__(
        self,
        access_token: str,
        *,
        refresh_token: str | None = None,
        app_key: str | None = None,
        app_secret: str | None = None,
        refresh_callback: RefreshCallback | None = None,
        config: DropboxConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if refresh_callback is not None and refresh_token is not None:
            msg = "Pass either refresh_callback or refresh_token, not both"
            raise ValueError(msg)

        self._config = config or DropboxConfig()
        self._credentials = CredentialStore(access_token)
        self._refresh_callback = refresh_callback

        self._http = AsyncHttpClient(
            self._config,
            self._credentials,
            refresh=self._refresh if refresh_callback or refresh_token else None,
            transport=transport,
        )
        self._auth_service: AuthService | None = None
        if app_key is not None or app_secret is not None:
            if not app_key or not app_secret:
                msg = "app_key and app_secret must both be given"
                raise ValueError(msg)
            self._auth_service = AuthService(self._http, app_key, app_secret)
        if refresh_token is not None:
            if self._auth_service is None:
                msg = "app_key and app_secret are required with refresh_token"
                raise ValueError(msg)
            self._refresh_callback = self._auth_service.refresh_callback(refresh_token)

        self._file_service = FileService(self._http)
        self._folder_service = FolderService(self._http)
        self._lock = asyncio.Lock()
        self._open = False

    async def __aenter__(self) -> Self:
        """Enter async context."""
        async with self._lock:
            if not self._open:
                await self._http.__aenter__()
                self._open = True
                logger.debug("Client opened")
        return self

    async def __aexit__(
        self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object
    ) -> None:
        """Exit async context."""
        await self.close()

    async def close(self) -> None:
        """Close the client and release resources."""
        async with self._lock:
            if not self._open:
                return
            await self._http.__aexit__(None, None, None)
            self._open = False
            logger.debug("Client closed")

    async def _refresh(self) -> str:
        if self._refresh_callback is None:
            msg = "No refresh callback configured"
            raise RuntimeError(msg)
        return await self._refresh_callback()

    @property
    def access_token(self) -> str:
        """The token currently sent with requests."""
        return self._credentials.current

    def set_access_token(self, access_token: str) -> None:
        """Replace the access token, e.g. after an out-of-band re-authentication."""
        self._credentials.replace(access_token)

    @property
    def auth(self) -> AuthService:
        """
        OAuth helper for this app.

        Raises:
            RuntimeError: If the client was created without app credentials.
        """
        if self._auth_service is None:
            raise RuntimeError("Client created without app_key/app_secret")
        return self._auth_service

    @staticmethod
    def content_hash(data: bytes) -> str:
        """Compute the Dropbox content hash of ``data``."""
        return content_hash(data)

    async def get_current_account(self) -> Account:
        """Get information about the current user's account."""
        return await get_current_account(self._http)

    async def list_folder(self, path: str = "", **options: Any) -> ListFolderResult:
        """
        List the first page of a folder.

        Args:
            path: Folder path, "" for the root.
            **options: recursive, include_deleted, limit, shared_link, ...

        Returns:
            First page of entries and a cursor.
        """
        return await self._folder_service.list_folder(path, **options)

    async def list_folder_continue(self, cursor: str) -> ListFolderResult:
        """Fetch the next page of a listing."""
        return await self._folder_service.list_folder_continue(cursor)

    async def iter_folder(self, path: str = "", **options: Any) -> AsyncGenerator[Metadata, None]:
        """
        Iterate over every entry of a folder.

        Example:
            ```python
            async for entry in client.iter_folder("/Photos", recursive=True):
                print(entry.path_display)
            ```
        """
        async for entry in self._folder_service.iter_entries(path, **options):
            yield entry

    async def list_folder_longpoll(self, cursor: str, timeout: int = 30) -> LongpollResult:
        """Wait for changes under ``cursor``."""
        return await self._folder_service.wait_for_changes(cursor, timeout)

    async def upload(
        self,
        path: str,
        *,
        data: bytes | None = None,
        file: Path | str | None = None,
        mode: WriteMode = WriteMode.ADD,
        autorename: bool = False,
        client_modified: datetime | None = None,
        mute: bool = False,
        strict_conflict: bool = False,
    ) -> FileMetadata:
        """
        Upload content from memory (``data``) or from disk (``file``).

        Raises:
            ValueError: If neither or both of ``data`` and ``file`` are given.
            APIError: If the API rejects the upload (e.g., a conflict).
        """
        return await self._file_service.upload(
            path,
            data=data,
            file=file,
            mode=mode,
            autorename=autorename,
            client_modified=client_modified,
            mute=mute,
            strict_conflict=strict_conflict,
        )

    async def download(self, path: str, *, verify: bool = True) -> DownloadedFile:
        """Download a file into memory."""
        return await self._file_service.download(path, verify=verify)

    async def download_to_file(
        self, path: str, destination: Path | str, *, verify: bool = True
    ) -> FileMetadata:
        """
        Download a file and save it to disk.

        Raises:
            IntegrityError: If the content does not match the server's hash.
        """
        return await self._file_service.download_to_file(path, Path(destination), verify=verify)
