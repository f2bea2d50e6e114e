"""
Dropbox API client layer.

Provides async HTTP communication with the Dropbox API.
"""

from dropbox_client.api.credentials import CredentialStore
from dropbox_client.api.error_classifier import classify_error
from dropbox_client.api.http_client import AsyncHttpClient, RefreshCallback, sanitize_for_log
from dropbox_client.api.outcome import Outcome, OutcomeKind
from dropbox_client.api.request import (
    BodyProducer,
    RequestSpec,
    bytes_body,
    file_body,
    form_body,
    json_body,
)

__all__ = [
    "AsyncHttpClient",
    "BodyProducer",
    "CredentialStore",
    "Outcome",
    "OutcomeKind",
    "RefreshCallback",
    "RequestSpec",
    "bytes_body",
    "classify_error",
    "file_body",
    "form_body",
    "json_body",
    "sanitize_for_log",
]
