import pytest

from dropbox_client.models.files import (
    FileMetadata,
    FolderMetadata,
    MetadataTag,
    SharedLink,
    WriteMode,
)


@pytest.mark.parametrize(
    ("mode", "expected"),
    [
        (WriteMode.ADD, "add"),
        (WriteMode.OVERWRITE, "overwrite"),
        (WriteMode.update("0123456789abcdef"), {".tag": "update", "update": "0123456789abcdef"}),
    ],
)
def test_write_mode_to_json(mode: WriteMode, expected: object) -> None:
    assert mode.to_json() == expected


def test_write_mode_constants_compare_by_value() -> None:
    assert WriteMode("add") == WriteMode.ADD
    assert WriteMode.update("a") != WriteMode.update("b")


def test_shared_link_omits_missing_password() -> None:
    assert SharedLink(url="https://www.dropbox.com/sh/x").to_json() == {
        "url": "https://www.dropbox.com/sh/x"
    }


def test_metadata_tags() -> None:
    assert FileMetadata.tag is MetadataTag.FILE
    assert FolderMetadata.tag == "folder"
