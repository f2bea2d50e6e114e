"""
File and folder domain models.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any, ClassVar, Self


class MetadataTag(StrEnum):
    """Discriminator of a metadata entry."""

    FILE = "file"
    FOLDER = "folder"
    DELETED = "deleted"


@dataclass(frozen=True)
class WriteMode:
    """
    What to do when writing to a path that already holds different content.

    Use the ``ADD`` and ``OVERWRITE`` constants, or ``WriteMode.update(rev)``.
    """

    ADD: ClassVar["WriteMode"]
    OVERWRITE: ClassVar["WriteMode"]

    mode: str
    rev: str | None = None

    @classmethod
    def update(cls, rev: str) -> Self:
        """Overwrite only if the existing file's revision matches ``rev``."""
        return cls("update", rev)

    def to_json(self) -> str | dict[str, str]:
        if self.mode == "update":
            return {".tag": "update", "update": self.rev or ""}
        return self.mode


WriteMode.ADD = WriteMode("add")
WriteMode.OVERWRITE = WriteMode("overwrite")


@dataclass(frozen=True, kw_only=True)
class SharedLink:
    """
    A shared link whose contents should be listed.

    Attributes:
        url: Shared link URL.
        password: Password, if the link is protected.
    """

    url: str
    password: str | None = None

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"url": self.url}
        if self.password is not None:
            data["password"] = self.password
        return data


@dataclass(frozen=True, kw_only=True)
class FileMetadata:
    """
    Metadata of a file.

    Attributes:
        id: Unique file identifier.
        name: Last path component, never contains a slash.
        client_modified: Modification time reported by the uploading client.
        server_modified: Last modification time on the server.
        rev: Revision of the current content.
        size: Size in bytes.
        path_lower: Lowercased full path, absent when not mounted.
        path_display: Cased path for display, absent when not mounted.
        is_downloadable: False for files that must be exported (e.g., Google Docs).
        content_hash: Dropbox content hash of the file.
    """

    id: str
    name: str
    client_modified: datetime
    server_modified: datetime
    rev: str
    size: int
    path_lower: str | None = None
    path_display: str | None = None
    is_downloadable: bool = True
    content_hash: str | None = None

    tag: ClassVar[MetadataTag] = MetadataTag.FILE


@dataclass(frozen=True, kw_only=True)
class FolderMetadata:
    """Metadata of a folder."""

    id: str
    name: str
    path_lower: str | None = None
    path_display: str | None = None

    tag: ClassVar[MetadataTag] = MetadataTag.FOLDER


@dataclass(frozen=True, kw_only=True)
class DeletedMetadata:
    """A file or folder used to exist at this path but no longer does."""

    name: str
    path_lower: str | None = None
    path_display: str | None = None

    tag: ClassVar[MetadataTag] = MetadataTag.DELETED


Metadata = FileMetadata | FolderMetadata | DeletedMetadata


@dataclass(frozen=True, kw_only=True)
class ListFolderResult:
    """
    One page of a folder listing.

    Attributes:
        entries: Entries of this page.
        cursor: Pass to ``list_folder_continue`` for the next page or later changes.
        has_more: Whether more entries are immediately available.
    """

    entries: tuple[Metadata, ...]
    cursor: str
    has_more: bool


@dataclass(frozen=True, kw_only=True)
class LongpollResult:
    """
    Result of waiting for changes.

    Attributes:
        changes: Whether new changes are available through ``list_folder_continue``.
        backoff: Seconds to wait before polling again, if the server asked for it.
    """

    changes: bool
    backoff: int | None = None


@dataclass(frozen=True, kw_only=True)
class DownloadedFile:
    """File content together with its metadata."""

    metadata: FileMetadata
    content: bytes
