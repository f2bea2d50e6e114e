"""
Folder listing service for Dropbox.
"""

from collections.abc import AsyncGenerator
from typing import Any

import structlog

from dropbox_client.api.endpoints.files import (
    list_folder,
    list_folder_continue,
    list_folder_longpoll,
)
from dropbox_client.api.http_client import AsyncHttpClient
from dropbox_client.models.files import ListFolderResult, LongpollResult, Metadata

logger = structlog.get_logger(__name__)


class FolderService:
    """Lists folders and watches them for changes."""

    def __init__(self, http: AsyncHttpClient) -> None:
        self._http = http

    async def list_folder(self, path: str = "", **options: Any) -> ListFolderResult:
        """
        Fetch the first page of a folder listing.

        Args:
            path: Folder path, "" for the root.
            **options: Listing options accepted by ``endpoints.files.list_folder``.
        """
        return await list_folder(self._http, path, **options)

    async def list_folder_continue(self, cursor: str) -> ListFolderResult:
        """Fetch the next page, or the changes since ``cursor`` was issued."""
        return await list_folder_continue(self._http, cursor)

    async def iter_entries(self, path: str = "", **options: Any) -> AsyncGenerator[Metadata, None]:
        """
        Yield every entry of a folder, following pagination cursors.

        Args:
            path: Folder path, "" for the root.
            **options: Listing options accepted by ``endpoints.files.list_folder``.

        Yields:
            Entries in server order.
        """
        result = await self.list_folder(path, **options)
        page = 1
        while True:
            for entry in result.entries:
                yield entry
            if not result.has_more:
                break
            page += 1
            logger.debug("Fetching next listing page", path=path, page=page)
            result = await self.list_folder_continue(result.cursor)

    async def wait_for_changes(self, cursor: str, timeout: int = 30) -> LongpollResult:
        """
        Wait until changes are available under ``cursor``.

        Args:
            cursor: Cursor from a previous listing.
            timeout: Server-side wait in seconds.
        """
        return await list_folder_longpoll(self._http, cursor, timeout)
