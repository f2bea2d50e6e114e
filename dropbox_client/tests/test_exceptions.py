import pytest

from dropbox_client.exceptions import (
    APIError,
    AuthenticationError,
    DropboxError,
    IntegrityError,
    NetworkError,
    RefreshError,
)


def test_str_includes_context() -> None:
    error = DropboxError("Request failed", attempt=2)
    assert str(error) == "Request failed (attempt=2)"


def test_str_without_context_is_message() -> None:
    assert str(NetworkError("Connection failed")) == "Connection failed"


@pytest.mark.parametrize(
    ("status_code", "tag", "expected"),
    [
        (401, "expired_access_token", True),
        (401, "invalid_access_token", False),
        (400, "expired_access_token", False),
        (401, None, False),
    ],
)
def test_is_expired_token(status_code: int, tag: str | None, expected: bool) -> None:
    error = APIError("rejected", status_code=status_code, error_tag=tag)
    assert error.is_expired_token is expected


def test_hierarchy() -> None:
    assert issubclass(RefreshError, AuthenticationError)
    for cls in (AuthenticationError, APIError, NetworkError, IntegrityError):
        assert issubclass(cls, DropboxError)


def test_integrity_error_carries_both_hashes() -> None:
    error = IntegrityError("mismatch", expected="aa", actual="bb")
    assert (error.expected, error.actual) == ("aa", "bb")
    assert "expected='aa'" in str(error)
