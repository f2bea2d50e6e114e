"""
Domain models for Dropbox.

These are immutable (frozen) dataclasses representing API results.
"""

from dropbox_client.models.account import Account, Name
from dropbox_client.models.auth import OAuthToken
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

__all__ = [
    # Auth
    "OAuthToken",
    # Account
    "Account",
    "Name",
    # Files
    "Metadata",
    "MetadataTag",
    "FileMetadata",
    "FolderMetadata",
    "DeletedMetadata",
    "ListFolderResult",
    "LongpollResult",
    "DownloadedFile",
    "WriteMode",
    "SharedLink",
]
