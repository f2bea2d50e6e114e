"""File and folder API endpoints."""

from datetime import datetime, timezone
from typing import Any

import httpx

from dropbox_client.api.http_client import AsyncHttpClient
from dropbox_client.api.request import BodyProducer
from dropbox_client.models.files import (
    DeletedMetadata,
    DownloadedFile,
    FileMetadata,
    FolderMetadata,
    ListFolderResult,
    LongpollResult,
    Metadata,
    MetadataTag,
    SharedLink,
    WriteMode,
)

_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


async def list_folder(
    http: AsyncHttpClient,
    path: str,
    *,
    recursive: bool = False,
    include_deleted: bool = False,
    include_has_explicit_shared_members: bool = False,
    include_mounted_folders: bool = True,
    limit: int | None = None,
    shared_link: SharedLink | None = None,
    include_non_downloadable_files: bool = True,
) -> ListFolderResult:
    """
    Start listing the contents of a folder.

    If the result's ``has_more`` is true, call ``list_folder_continue`` with
    its cursor to retrieve more entries.

    Args:
        http: Configured async HTTP client.
        path: Folder path, "" for the root.
        recursive: Include the contents of all subfolders.
        include_deleted: Include entries for deleted files and folders.
        include_has_explicit_shared_members: Flag files with explicit members.
        include_mounted_folders: Include app, shared and team folders.
        limit: Approximate maximum number of entries per page.
        shared_link: List the contents of a shared link instead; ``path`` is
            then relative to the link root.
        include_non_downloadable_files: Include files such as Google Docs.

    Returns:
        First page of entries.
    """
    args: dict[str, Any] = {
        "path": path,
        "recursive": recursive,
        "include_deleted": include_deleted,
        "include_has_explicit_shared_members": include_has_explicit_shared_members,
        "include_mounted_folders": include_mounted_folders,
        "include_non_downloadable_files": include_non_downloadable_files,
    }
    if limit is not None:
        args["limit"] = limit
    if shared_link is not None:
        args["shared_link"] = shared_link.to_json()

    data = await http.request_json("/2/files/list_folder", args)
    return parse_list_folder_result(data)


async def list_folder_continue(http: AsyncHttpClient, cursor: str) -> ListFolderResult:
    """
    Continue a listing from a cursor.

    An expired cursor is rejected with status 409 (``reset`` tag); start over
    with ``list_folder`` in that case.
    """
    data = await http.request_json("/2/files/list_folder/continue", {"cursor": cursor})
    return parse_list_folder_result(data)


async def list_folder_longpoll(
    http: AsyncHttpClient, cursor: str, timeout: int = 30
) -> LongpollResult:
    """
    Block until changes are available under a cursor or the timeout elapses.

    Sent unauthenticated to the notify host, as the endpoint requires.

    Args:
        http: Configured async HTTP client.
        cursor: Cursor from ``list_folder`` or ``list_folder_continue``.
        timeout: Server-side wait in seconds (30 to 480).

    Returns:
        Whether changes are available, plus an optional backoff.
    """
    data = await http.request_json(
        "/2/files/list_folder/longpoll",
        {"cursor": cursor, "timeout": timeout},
        base_url=http.config.notify_url,
        authenticated=False,
        timeout=timeout + http.config.longpoll_margin,
    )
    return LongpollResult(changes=data["changes"], backoff=data.get("backoff"))


async def upload(
    http: AsyncHttpClient,
    path: str,
    body: BodyProducer,
    *,
    mode: WriteMode = WriteMode.ADD,
    autorename: bool = False,
    client_modified: datetime | None = None,
    mute: bool = False,
    strict_conflict: bool = False,
    content_hash: str | None = None,
    content_length: int | None = None,
) -> FileMetadata:
    """
    Create a file with the given content.

    Not meant for files larger than 150 MB; those need an upload session.

    Args:
        http: Configured async HTTP client.
        path: Destination path.
        body: Producer of the file content.
        mode: Conflict behaviour when the path already holds a file.
        autorename: Let the server rename the file to avoid a conflict.
        client_modified: Timestamp stored as ``client_modified``.
        mute: Do not notify the user's devices about this change.
        strict_conflict: Report a conflict even for identical content.
        content_hash: Expected content hash; the server rejects mismatching uploads.
        content_length: Size of the body, when known.

    Returns:
        Metadata of the stored file.
    """
    args: dict[str, Any] = {
        "path": path,
        "mode": mode.to_json(),
        "autorename": autorename,
        "mute": mute,
        "strict_conflict": strict_conflict,
    }
    if client_modified is not None:
        args["client_modified"] = _format_timestamp(client_modified)
    if content_hash is not None:
        args["content_hash"] = content_hash

    data = await http.upload_content(
        "/2/files/upload", args, body, content_length=content_length
    )
    return parse_file_metadata(data)


async def download(http: AsyncHttpClient, path: str) -> DownloadedFile:
    """Download a file into memory."""
    result, response = await http.download_content("/2/files/download", {"path": path})
    return DownloadedFile(metadata=parse_file_metadata(result), content=response.content)


async def open_download(http: AsyncHttpClient, path: str) -> tuple[FileMetadata, httpx.Response]:
    """
    Start a streamed download.

    The caller must ``aclose()`` the returned response.

    Returns:
        File metadata and the response whose body has not been read yet.
    """
    result, response = await http.download_content(
        "/2/files/download", {"path": path}, stream=True
    )
    try:
        metadata = parse_file_metadata(result)
    except (KeyError, TypeError, ValueError):
        await response.aclose()
        raise
    return metadata, response


def parse_metadata(data: dict[str, Any]) -> Metadata:
    """
    Build a metadata model from its ``.tag``.

    Raises:
        ValueError: For tags this client does not know.
    """
    tag = data.get(".tag")
    if tag == MetadataTag.FILE:
        return parse_file_metadata(data)
    if tag == MetadataTag.FOLDER:
        return FolderMetadata(
            id=data["id"],
            name=data["name"],
            path_lower=data.get("path_lower"),
            path_display=data.get("path_display"),
        )
    if tag == MetadataTag.DELETED:
        return DeletedMetadata(
            name=data["name"],
            path_lower=data.get("path_lower"),
            path_display=data.get("path_display"),
        )
    msg = f"Unsupported metadata tag: {tag!r}"
    raise ValueError(msg)


def parse_file_metadata(data: dict[str, Any]) -> FileMetadata:
    return FileMetadata(
        id=data["id"],
        name=data["name"],
        client_modified=_parse_timestamp(data["client_modified"]),
        server_modified=_parse_timestamp(data["server_modified"]),
        rev=data["rev"],
        size=data["size"],
        path_lower=data.get("path_lower"),
        path_display=data.get("path_display"),
        is_downloadable=data.get("is_downloadable", True),
        content_hash=data.get("content_hash"),
    )


def parse_list_folder_result(data: dict[str, Any]) -> ListFolderResult:
    return ListFolderResult(
        entries=tuple(parse_metadata(e) for e in data["entries"]),
        cursor=data["cursor"],
        has_more=data["has_more"],
    )


def _parse_timestamp(value: str) -> datetime:
    """Parse a Dropbox timestamp to UTC datetime."""
    return datetime.strptime(value, _TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)


def _format_timestamp(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(_TIMESTAMP_FORMAT)
