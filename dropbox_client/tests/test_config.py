import pytest

from dropbox_client.config import DropboxConfig


def test_defaults_point_at_dropbox_hosts() -> None:
    config = DropboxConfig()
    assert config.api_url == "https://api.dropboxapi.com"
    assert config.content_url == "https://content.dropboxapi.com"
    assert config.notify_url == "https://notify.dropboxapi.com"


@pytest.mark.parametrize(
    "overrides",
    [{"timeout": 0}, {"longpoll_margin": -1}, {"upload_read_size": 0}],
)
def test_invalid_values_are_rejected(overrides: dict) -> None:
    with pytest.raises(ValueError):
        DropboxConfig(**overrides)
