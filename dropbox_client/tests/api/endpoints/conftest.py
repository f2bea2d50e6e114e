from unittest.mock import Mock

import pytest

from dropbox_client.config import DropboxConfig


@pytest.fixture
def mock_http() -> Mock:
    """Stand-in for AsyncHttpClient; tests attach AsyncMock methods."""
    http = Mock()
    http.config = DropboxConfig()
    return http
