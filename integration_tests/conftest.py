"""Pytest configuration for the end-to-end workflow tests."""

import pytest

from liftmates.config import get_settings


def pytest_collection_modifyitems(items):
    """Tag every workflow test with the integration marker."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read settings so each test sees the current environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
