"""
File transfer service for Dropbox.

Handles uploads from memory or disk and streaming downloads with content
hash verification.
"""

from datetime import datetime
from pathlib import Path

import httpx
import structlog

from dropbox_client.api.endpoints.files import download, open_download, upload
from dropbox_client.api.http_client import AsyncHttpClient
from dropbox_client.api.request import bytes_body, file_body
from dropbox_client.core.content_hash import ContentHasher, content_hash, content_hash_file
from dropbox_client.exceptions import IntegrityError, NetworkError
from dropbox_client.models.files import DownloadedFile, FileMetadata, WriteMode

logger = structlog.get_logger(__name__)


class FileService:
    """
    Service for uploading and downloading files.

    Supports streaming for large files in both directions.
    """

    def __init__(self, http: AsyncHttpClient) -> None:
        """
        Args:
            http: Async HTTP client.
        """
        self._http = http

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
        Upload content from memory or from a local file.

        The content hash is computed locally and sent along, so the server
        rejects the upload if the bytes it received differ.

        Args:
            path: Destination path in Dropbox.
            data: Content to upload. Mutually exclusive with ``file``.
            file: Local file to stream. Mutually exclusive with ``data``.
            mode: Conflict behaviour when the path already holds a file.
            autorename: Let the server rename the file to avoid a conflict.
            client_modified: Timestamp stored as ``client_modified``.
            mute: Do not notify the user's devices about this change.
            strict_conflict: Report a conflict even for identical content.

        Returns:
            Metadata of the stored file.

        Raises:
            ValueError: If neither or both of ``data`` and ``file`` are given.
        """
        if (data is None) == (file is None):
            msg = "Exactly one of 'data' or 'file' must be provided"
            raise ValueError(msg)

        if data is not None:
            body = bytes_body(data)
            length = len(data)
            expected_hash = content_hash(data)
        else:
            source = Path(file)
            body = file_body(source, read_size=self._http.config.upload_read_size)
            length = source.stat().st_size
            expected_hash = content_hash_file(source)

        logger.debug("Uploading file", path=path, size=length)
        metadata = await upload(
            self._http,
            path,
            body,
            mode=mode,
            autorename=autorename,
            client_modified=client_modified,
            mute=mute,
            strict_conflict=strict_conflict,
            content_hash=expected_hash,
            content_length=length,
        )
        logger.info("File uploaded", path=path, rev=metadata.rev, size=metadata.size)
        return metadata

    async def download(self, path: str, *, verify: bool = True) -> DownloadedFile:
        """
        Download a file into memory.

        Args:
            path: File path in Dropbox.
            verify: Check the content against the server's content hash.

        Raises:
            IntegrityError: If verification is enabled and the hashes differ.
        """
        downloaded = await download(self._http, path)
        expected = downloaded.metadata.content_hash
        if verify and expected is not None:
            _check_hash(path, expected, content_hash(downloaded.content))
        return downloaded

    async def download_to_file(
        self, path: str, destination: Path, *, verify: bool = True
    ) -> FileMetadata:
        """
        Stream a file to disk.

        The content is hashed while it is written. On a mismatch the partial
        file is removed.

        Args:
            path: File path in Dropbox.
            destination: Local file path to save to.
            verify: Check the content against the server's content hash.

        Returns:
            Metadata of the downloaded file.

        Raises:
            IntegrityError: If verification is enabled and the hashes differ.
            NetworkError: If the connection drops mid-transfer.
        """
        destination.parent.mkdir(parents=True, exist_ok=True)
        metadata, response = await open_download(self._http, path)
        hasher = ContentHasher()
        try:
            with destination.open("wb") as f:
                async for chunk in response.aiter_bytes():
                    f.write(chunk)
                    hasher.update(chunk)
        except httpx.TransportError as e:
            destination.unlink(missing_ok=True)
            logger.warning("Download interrupted", path=path, error=repr(e))
            msg = f"Download of {path} interrupted: {e!r}"
            raise NetworkError(msg, url=str(response.request.url)) from e
        finally:
            await response.aclose()

        if verify and metadata.content_hash is not None:
            try:
                _check_hash(path, metadata.content_hash, hasher.hexdigest())
            except IntegrityError:
                destination.unlink(missing_ok=True)
                raise

        logger.info("File saved", path=path, destination=str(destination))
        return metadata


def _check_hash(path: str, expected: str, actual: str) -> None:
    if expected != actual:
        logger.warning("Content hash mismatch", path=path, expected=expected, actual=actual)
        msg = f"Content hash mismatch for {path}"
        raise IntegrityError(msg, expected=expected, actual=actual)
