import json
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from dropbox_client.api.endpoints.files import (
    download,
    list_folder,
    list_folder_continue,
    list_folder_longpoll,
    open_download,
    parse_metadata,
    upload,
)
from dropbox_client.api.request import bytes_body
from dropbox_client.models.files import (
    DeletedMetadata,
    FileMetadata,
    FolderMetadata,
    SharedLink,
    WriteMode,
)
from dropbox_client.tests.utils.factories import make_file_entry


def listing(entries: list, *, has_more: bool = False) -> dict:
    return {"entries": entries, "cursor": "cursor-1", "has_more": has_more}


@pytest.mark.asyncio
async def test_list_folder_sends_default_arguments(mock_http: Mock) -> None:
    mock_http.request_json = AsyncMock(return_value=listing([]))

    await list_folder(mock_http, "")

    mock_http.request_json.assert_awaited_once_with(
        "/2/files/list_folder",
        {
            "path": "",
            "recursive": False,
            "include_deleted": False,
            "include_has_explicit_shared_members": False,
            "include_mounted_folders": True,
            "include_non_downloadable_files": True,
        },
    )


@pytest.mark.asyncio
async def test_list_folder_sends_optional_arguments(mock_http: Mock) -> None:
    mock_http.request_json = AsyncMock(return_value=listing([]))

    await list_folder(
        mock_http,
        "/docs",
        recursive=True,
        limit=100,
        shared_link=SharedLink(url="https://www.dropbox.com/sh/abc", password="pw"),
    )

    args = mock_http.request_json.await_args.args[1]
    assert args["recursive"] is True
    assert args["limit"] == 100
    assert args["shared_link"] == {"url": "https://www.dropbox.com/sh/abc", "password": "pw"}


@pytest.mark.asyncio
async def test_list_folder_parses_all_entry_kinds(mock_http: Mock) -> None:
    mock_http.request_json = AsyncMock(
        return_value=listing(
            [
                make_file_entry(),
                {
                    ".tag": "folder",
                    "id": "id:folder",
                    "name": "math",
                    "path_lower": "/homework/math",
                    "path_display": "/Homework/math",
                },
                {".tag": "deleted", "name": "old.txt", "path_lower": "/old.txt"},
            ],
            has_more=True,
        )
    )

    result = await list_folder(mock_http, "/Homework")

    file_entry, folder_entry, deleted_entry = result.entries
    assert isinstance(file_entry, FileMetadata)
    assert file_entry.size == 7212
    assert file_entry.client_modified == datetime(2015, 5, 12, 15, 50, 38, tzinfo=timezone.utc)
    assert isinstance(folder_entry, FolderMetadata)
    assert folder_entry.path_display == "/Homework/math"
    assert isinstance(deleted_entry, DeletedMetadata)
    assert deleted_entry.path_display is None
    assert result.cursor == "cursor-1"
    assert result.has_more is True


@pytest.mark.asyncio
async def test_list_folder_continue_sends_cursor(mock_http: Mock) -> None:
    mock_http.request_json = AsyncMock(return_value=listing([]))

    result = await list_folder_continue(mock_http, "cursor-0")

    mock_http.request_json.assert_awaited_once_with(
        "/2/files/list_folder/continue", {"cursor": "cursor-0"}
    )
    assert result.entries == ()


@pytest.mark.asyncio
async def test_list_folder_longpoll_is_unauthenticated_on_notify_host(mock_http: Mock) -> None:
    mock_http.request_json = AsyncMock(return_value={"changes": True, "backoff": 60})

    result = await list_folder_longpoll(mock_http, "cursor-1", timeout=120)

    mock_http.request_json.assert_awaited_once_with(
        "/2/files/list_folder/longpoll",
        {"cursor": "cursor-1", "timeout": 120},
        base_url="https://notify.dropboxapi.com",
        authenticated=False,
        timeout=120 + mock_http.config.longpoll_margin,
    )
    assert result.changes is True
    assert result.backoff == 60


@pytest.mark.asyncio
async def test_upload_builds_argument_header(mock_http: Mock) -> None:
    mock_http.upload_content = AsyncMock(return_value=make_file_entry())
    body = bytes_body(b"data")
    modified = datetime(2024, 1, 2, 4, 5, 6, tzinfo=timezone(timedelta(hours=1)))

    metadata = await upload(
        mock_http,
        "/a.txt",
        body,
        mode=WriteMode.update("a1c10ce0dd78"),
        mute=True,
        strict_conflict=True,
        client_modified=modified,
        content_hash="abc",
        content_length=4,
    )

    mock_http.upload_content.assert_awaited_once_with(
        "/2/files/upload",
        {
            "path": "/a.txt",
            "mode": {".tag": "update", "update": "a1c10ce0dd78"},
            "autorename": False,
            "mute": True,
            "strict_conflict": True,
            "client_modified": "2024-01-02T03:05:06Z",
            "content_hash": "abc",
        },
        body,
        content_length=4,
    )
    assert metadata.rev == "a1c10ce0dd78"


@pytest.mark.asyncio
async def test_upload_sends_add_mode_by_default(mock_http: Mock) -> None:
    mock_http.upload_content = AsyncMock(return_value=make_file_entry())

    await upload(mock_http, "/a.txt", bytes_body(b""))

    args = mock_http.upload_content.await_args.args[1]
    assert args["mode"] == "add"
    assert "client_modified" not in args
    assert "content_hash" not in args


@pytest.mark.asyncio
async def test_download_returns_metadata_and_content(mock_http: Mock) -> None:
    response = httpx.Response(200, content=b"hello")
    mock_http.download_content = AsyncMock(return_value=(make_file_entry(size=5), response))

    downloaded = await download(mock_http, "/a.txt")

    mock_http.download_content.assert_awaited_once_with("/2/files/download", {"path": "/a.txt"})
    assert downloaded.content == b"hello"
    assert downloaded.metadata.size == 5


@pytest.mark.asyncio
async def test_open_download_requests_streamed_response(mock_http: Mock) -> None:
    response = Mock()
    mock_http.download_content = AsyncMock(return_value=(make_file_entry(), response))

    metadata, streamed = await open_download(mock_http, "/a.txt")

    mock_http.download_content.assert_awaited_once_with(
        "/2/files/download", {"path": "/a.txt"}, stream=True
    )
    assert streamed is response
    assert metadata.name == "Prime_Numbers.txt"


@pytest.mark.asyncio
async def test_open_download_closes_response_on_bad_metadata(mock_http: Mock) -> None:
    response = Mock()
    response.aclose = AsyncMock()
    mock_http.download_content = AsyncMock(return_value=({"name": "a.txt"}, response))

    with pytest.raises(KeyError):
        await open_download(mock_http, "/a.txt")

    response.aclose.assert_awaited_once()


def test_parse_metadata_rejects_unknown_tag() -> None:
    with pytest.raises(ValueError, match="Unsupported metadata tag"):
        parse_metadata({".tag": "symlink", "name": "x"})


def test_parse_metadata_defaults_optional_file_fields() -> None:
    entry = make_file_entry()
    for key in ("path_lower", "path_display", "is_downloadable", "content_hash"):
        del entry[key]

    metadata = parse_metadata(json.loads(json.dumps(entry)))

    assert metadata.path_lower is None
    assert metadata.is_downloadable is True
    assert metadata.content_hash is None


@pytest.mark.asyncio
async def test_open_download_closes_response_on_bad_timestamp(mock_http: Mock) -> None:
    response = Mock()
    response.aclose = AsyncMock()
    mock_http.download_content = AsyncMock(
        return_value=(make_file_entry(client_modified=1431445838), response)
    )

    with pytest.raises(TypeError):
        await open_download(mock_http, "/a.txt")

    response.aclose.assert_awaited_once()
