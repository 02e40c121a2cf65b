"""Pytest fixtures for API integration tests.

Each test client is built from its own settings object carrying a freshly
generated key, so tests never depend on the process configuration.
"""

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from seal.infrastructure.security import KeyMaterial
from seal.presentation.api.app import API_V1_PREFIX, create_app
from seal_config.settings import Settings

TEXT_PLAIN_HEADERS = {"Content-Type": "text/plain"}


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def text_headers() -> dict:
    return dict(TEXT_PLAIN_HEADERS)


@pytest.fixture
def api_key_material() -> KeyMaterial:
    return KeyMaterial.generate()


@pytest.fixture
def api_settings(api_key_material) -> Settings:
    """Test API settings with debug enabled."""
    return Settings(
        encryption_key=SecretStr(api_key_material.export()),
        api_host="127.0.0.1",
        api_port=8000,
        api_debug=True,
        api_cors_origins="http://localhost:3000",
    )


@pytest.fixture
def test_client(api_settings):
    """Create a test client running the application lifespan."""
    with TestClient(create_app(settings=api_settings)) as client:
        yield client


@pytest.fixture
def trimming_client(api_settings):
    """Test client with plaintext trimming enabled."""
    settings = api_settings.model_copy(update={"trim_plaintext": True})
    with TestClient(create_app(settings=settings)) as client:
        yield client
