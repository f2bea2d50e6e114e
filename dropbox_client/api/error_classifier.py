"""
Turn failed HTTP responses into APIError values.

Dropbox error bodies look like::

    {"error_summary": "expired_access_token/...", "error": {".tag": "expired_access_token"}}

The OAuth token endpoint uses the RFC 6749 shape instead::

    {"error": "invalid_grant", "error_description": "refresh token is malformed"}
"""

import json
from typing import Any

import structlog

from dropbox_client.exceptions import APIError

logger = structlog.get_logger(__name__)

_PREVIEW_LEN = 200


class _UnparseableBody(Exception):
    pass


def classify_error(
    status_code: int,
    body: bytes | str,
    *,
    endpoint: str | None = None,
) -> APIError:
    """
    Classify a failed response.

    Never raises: a body that cannot be understood yields an APIError with
    only the status code set, and a warning is logged.

    Args:
        status_code: HTTP status of the response (>= 400).
        body: Raw response body.
        endpoint: Request URL, attached to the error for context.

    Returns:
        The classified error.
    """
    try:
        summary, tag = _parse(body)
    except _UnparseableBody as e:
        logger.warning(
            "Unparseable error body",
            status_code=status_code,
            endpoint=endpoint,
            reason=str(e),
            preview=_preview(body),
        )
        return APIError(
            f"HTTP {status_code}",
            status_code=status_code,
            endpoint=endpoint,
        )

    return APIError(
        summary or tag,
        status_code=status_code,
        error_summary=summary,
        error_tag=tag,
        endpoint=endpoint,
    )


def _parse(body: bytes | str) -> tuple[str | None, str]:
    try:
        data: Any = json.loads(body)
    except (ValueError, TypeError) as e:
        raise _UnparseableBody("invalid JSON") from e

    if not isinstance(data, dict):
        raise _UnparseableBody("not a JSON object")

    error = data.get("error")
    if isinstance(error, dict):
        tag = error.get(".tag")
        summary = data.get("error_summary")
    elif isinstance(error, str):
        tag = error
        summary = data.get("error_description")
    else:
        raise _UnparseableBody("missing error field")

    if not isinstance(tag, str) or not tag:
        raise _UnparseableBody("missing error tag")
    if not isinstance(summary, str):
        summary = None
    return summary, tag


def _preview(body: bytes | str) -> str:
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    return body[:_PREVIEW_LEN]
