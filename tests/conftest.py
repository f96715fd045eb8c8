"""
Shared fixtures.

Live providers are never called: routes get a provider through
app.dependency_overrides, and SDK clients are swapped for AsyncMocks.
"""

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services.providers import MockProvider, get_provider


@pytest.fixture
def use_provider():
    """Install a provider for the duration of a test."""
    def _install(provider):
        app.dependency_overrides[get_provider] = lambda: provider
        return provider

    yield _install
    app.dependency_overrides.pop(get_provider, None)


@pytest.fixture
def client(use_provider):
    use_provider(MockProvider())
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
