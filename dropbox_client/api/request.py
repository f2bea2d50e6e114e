"""
Request descriptions for the dispatcher.

A request body is described by a producer rather than by the bytes
themselves: the producer is called once per attempt, so a request can be
re-sent after a token refresh even when its body is streamed from disk.
"""

import json
from collections.abc import AsyncIterator, Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import urlencode

import httpx

BodyProducer = Callable[[], bytes | AsyncIterator[bytes]]


@dataclass(frozen=True, kw_only=True)
class RequestSpec:
    """
    Everything needed to (re)issue one logical request.

    Attributes:
        method: HTTP method.
        url: Absolute URL.
        headers: Extra headers. ``Authorization`` is added by the dispatcher.
        body: Body producer, invoked once per attempt.
        body_required: Reject construction when ``body`` is missing.
        authenticated: Whether to send the bearer token.
        stream: Leave the success response body unread; the caller must close it.
        timeout: Per-request timeout in seconds, overriding the client default.
    """

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: BodyProducer | None = None
    body_required: bool = False
    authenticated: bool = True
    stream: bool = False
    timeout: float | None = None

    def __post_init__(self) -> None:
        if not self.method:
            msg = "method must not be empty"
            raise ValueError(msg)
        if not httpx.URL(self.url).is_absolute_url:
            msg = f"url must be absolute: {self.url!r}"
            raise ValueError(msg)
        if self.body_required and self.body is None:
            msg = f"{self.method} {self.url} requires a body producer"
            raise ValueError(msg)

    def produce_body(self) -> bytes | AsyncIterator[bytes] | None:
        """Build a fresh body for one attempt."""
        if self.body is None:
            return None
        return self.body()


def bytes_body(data: bytes) -> BodyProducer:
    """Producer returning the same in-memory bytes on every attempt."""
    payload = bytes(data)
    return lambda: payload


def json_body(payload: Any) -> BodyProducer:
    """Producer returning ``payload`` encoded as JSON."""
    return bytes_body(json.dumps(payload).encode())


def form_body(fields: Mapping[str, str]) -> BodyProducer:
    """Producer returning ``fields`` as application/x-www-form-urlencoded."""
    return bytes_body(urlencode(fields).encode())


def file_body(path: Path, *, read_size: int = 64 * 1024) -> BodyProducer:
    """
    Producer streaming a file from disk.

    Each call opens the file again, so a retried request re-reads it from the
    start.

    Args:
        path: Local file to stream.
        read_size: Bytes read per chunk.
    """

    async def _stream() -> AsyncIterator[bytes]:
        with path.open("rb") as f:
            while chunk := f.read(read_size):
                yield chunk

    return _stream
