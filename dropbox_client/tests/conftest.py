from collections.abc import AsyncIterator

import pytest
import pytest_asyncio

from dropbox_client.api.credentials import CredentialStore
from dropbox_client.api.http_client import AsyncHttpClient
from dropbox_client.config import DropboxConfig
from dropbox_client.tests.utils.mock_transport import ACCESS_TOKEN, MockTransport


@pytest.fixture
def config() -> DropboxConfig:
    return DropboxConfig()


@pytest.fixture
def credentials() -> CredentialStore:
    return CredentialStore(ACCESS_TOKEN)


@pytest.fixture
def mock_transport() -> MockTransport:
    return MockTransport()


@pytest_asyncio.fixture
async def http(
    config: DropboxConfig,
    credentials: CredentialStore,
    mock_transport: MockTransport,
) -> AsyncIterator[AsyncHttpClient]:
    """HTTP client without a refresh callback, backed by the mock transport."""
    async with AsyncHttpClient(config, credentials, transport=mock_transport) as client:
        yield client
