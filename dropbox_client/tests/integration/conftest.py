import os

import pytest


def pytest_collection_modifyitems(config: pytest.Config, items: list) -> None:
    if os.getenv("DROPBOX_TEST_ACCESS_TOKEN"):
        return
    mark_expr = getattr(config.option, "markexpr", "")
    if "integration" in mark_expr:
        return
    skip = pytest.mark.skip(reason="DROPBOX_TEST_ACCESS_TOKEN not set")
    for item in items:
        if item.get_closest_marker("integration"):
            item.add_marker(skip)


@pytest.fixture(scope="session")
def dropbox_access_token() -> str:
    token = os.getenv("DROPBOX_TEST_ACCESS_TOKEN")
    if not token:
        pytest.fail("DROPBOX_TEST_ACCESS_TOKEN must be set to run integration tests.")
    return token
