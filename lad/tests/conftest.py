"""
Pytest configuration for the Lad test suite.

Provides environment, storage and configuration fixtures shared by the
unit tests. No fixture touches the network: object storage and the SMTP
backend are always mocks.
"""

import pytest
from unittest.mock import MagicMock

from lad.config import build_config, load_environment
from lad.core.settings import Settings
from lad.core.storage import ObjectStorage

# 1x1 transparent PNG
PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@pytest.fixture
def png_base64() -> str:
    return PNG_BASE64


@pytest.fixture
def make_env():
    """Return a function building an EnvironmentMap without reading .env files."""
    def _make_env(**overrides):
        values = {"ENVIRONMENT": "test", "APP_NAME": "Lad"}
        values.update(overrides)
        return load_environment(Settings(_env_file=None, **values))
    return _make_env


@pytest.fixture
def env(make_env):
    return make_env()


@pytest.fixture
def fake_storage():
    """ObjectStorage double returning CDN URLs keyed by the upload key."""
    storage = MagicMock(spec=ObjectStorage)
    storage.upload.side_effect = lambda data, key, content_type: f"https://cdn.example.com/{key}"
    return storage


@pytest.fixture
def failing_storage():
    """ObjectStorage double whose uploads always fail."""
    from lad.core.exceptions import StorageUploadError

    storage = MagicMock(spec=ObjectStorage)
    storage.upload.side_effect = StorageUploadError(detail="bucket unavailable", key="x.png")
    return storage


@pytest.fixture
def config(env, fake_storage):
    return build_config(env, storage=fake_storage)
