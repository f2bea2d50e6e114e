"""
Dropbox Python Client.

A modern, async Python client for the Dropbox HTTP API with transparent
access token refresh and content hash verification.

Example:
    ```python
    from dropbox_client import DropboxClient, content_hash

    async with DropboxClient(access_token) as client:
        result = await client.list_folder("")
        for entry in result.entries:
            print(entry.name)

        metadata = await client.upload("/hello.txt", data=b"hello")
        assert metadata.content_hash == content_hash(b"hello")
    ```
"""

from dropbox_client.api.outcome import Outcome, OutcomeKind
from dropbox_client.client import DropboxClient
from dropbox_client.config import DropboxConfig
from dropbox_client.core.content_hash import ContentHasher, content_hash
from dropbox_client.exceptions import (
    APIError,
    AuthenticationError,
    DropboxError,
    IntegrityError,
    NetworkError,
    RefreshError,
)
from dropbox_client.models.files import (
    DeletedMetadata,
    FileMetadata,
    FolderMetadata,
    SharedLink,
    WriteMode,
)

__version__ = "0.1.0"

__all__ = [
    # Main client
    "DropboxClient",
    "DropboxConfig",
    # Content hash
    "ContentHasher",
    "content_hash",
    # Dispatch results
    "Outcome",
    "OutcomeKind",
    # Models
    "FileMetadata",
    "FolderMetadata",
    "DeletedMetadata",
    "WriteMode",
    "SharedLink",
    # Exceptions
    "DropboxError",
    "AuthenticationError",
    "RefreshError",
    "APIError",
    "NetworkError",
    "IntegrityError",
]
