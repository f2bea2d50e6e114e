import pytest

from dropbox_client.api.credentials import CredentialStore


def test_current_returns_initial_token() -> None:
    store = CredentialStore("token-1")
    assert store.current == "token-1"


def test_replace_installs_new_token_and_returns_previous() -> None:
    store = CredentialStore("token-1")

    previous = store.replace("token-2")

    assert previous == "token-1"
    assert store.current == "token-2"


def test_last_replace_wins() -> None:
    store = CredentialStore("token-1")
    store.replace("token-2")
    store.replace("token-3")
    assert store.current == "token-3"


@pytest.mark.parametrize("token", ["", None, 123])
def test_invalid_tokens_are_rejected(token: object) -> None:
    with pytest.raises(ValueError):
        CredentialStore(token)  # type: ignore[arg-type]


def test_replace_with_empty_token_keeps_current() -> None:
    store = CredentialStore("token-1")
    with pytest.raises(ValueError):
        store.replace("")
    assert store.current == "token-1"
