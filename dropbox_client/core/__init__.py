"""Pure helpers with no network dependencies."""

from dropbox_client.core.content_hash import (
    CHUNK_SIZE,
    ContentHasher,
    content_hash,
    content_hash_file,
)

__all__ = ["CHUNK_SIZE", "ContentHasher", "content_hash", "content_hash_file"]
