"""
Dropbox content hash.

The server identifies file content by a two-level digest: the input is split
into 4 MiB chunks, each chunk is hashed with SHA-256, the raw chunk digests
are concatenated, and the concatenation is hashed again with SHA-256.

See https://www.dropbox.com/developers/reference/content-hash
"""

import hashlib
from pathlib import Path

CHUNK_SIZE = 4 * 1024 * 1024


class ContentHasher:
    """
    Incremental content hasher.

    Bytes may be fed in pieces of any size; the result is the same as hashing
    the concatenation in one call.

    Example:
        ```python
        hasher = ContentHasher()
        async for piece in response.aiter_bytes():
            hasher.update(piece)
        assert hasher.hexdigest() == metadata.content_hash
        ```
    """

    def __init__(self) -> None:
        self._overall = hashlib.sha256()
        self._chunk = hashlib.sha256()
        self._chunk_len = 0

    def update(self, data: bytes) -> None:
        """
        Feed more bytes.

        Args:
            data: Next slice of the input.
        """
        view = memoryview(data)
        while len(view) > 0:
            take = min(CHUNK_SIZE - self._chunk_len, len(view))
            self._chunk.update(view[:take])
            self._chunk_len += take
            view = view[take:]
            if self._chunk_len == CHUNK_SIZE:
                self._overall.update(self._chunk.digest())
                self._chunk = hashlib.sha256()
                self._chunk_len = 0

    def digest(self) -> bytes:
        """Return the raw 32-byte digest of everything fed so far."""
        overall = self._overall.copy()
        # A partial chunk is only folded in when non-empty.
        if self._chunk_len > 0:
            overall.update(self._chunk.digest())
        return overall.digest()

    def hexdigest(self) -> str:
        """Return the 64-character lowercase hex digest."""
        return self.digest().hex()


def content_hash(data: bytes) -> str:
    """
    Compute the Dropbox content hash of a byte sequence.

    Args:
        data: Full content.

    Returns:
        64-character lowercase hex digest.
    """
    chunk_digests = b"".join(
        hashlib.sha256(data[start : start + CHUNK_SIZE]).digest()
        for start in range(0, len(data), CHUNK_SIZE)
    )
    return hashlib.sha256(chunk_digests).hexdigest()


def content_hash_file(path: Path | str, *, read_size: int = CHUNK_SIZE) -> str:
    """
    Compute the content hash of a file without loading it whole.

    Args:
        path: Local file path.
        read_size: Bytes read per call.

    Returns:
        64-character lowercase hex digest.
    """
    hasher = ContentHasher()
    with Path(path).open("rb") as f:
        while piece := f.read(read_size):
            hasher.update(piece)
    return hasher.hexdigest()
