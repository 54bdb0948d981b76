"""
Unit tests for the object storage client.

The Supabase client is replaced with a mock through ``client_factory``.
"""

import pytest
from unittest.mock import MagicMock

from lad.core.exceptions import ConfigurationError, StorageUploadError
from lad.core.storage import ObjectStorage


@pytest.fixture
def supabase():
    client = MagicMock()
    bucket = client.storage.from_.return_value
    bucket.upload.return_value = MagicMock(error=None)
    bucket.get_public_url.side_effect = lambda key: f"https://project.supabase.co/storage/v1/object/public/lad/{key}"
    return client


def make_storage(supabase, **kwargs):
    options = {
        "url": "https://project.supabase.co",
        "key": "service-key",
        "bucket": "lad",
        "client_factory": MagicMock(return_value=supabase),
    }
    options.update(kwargs)
    return ObjectStorage(**options)


def test_upload_returns_cdn_url(supabase):
    storage = make_storage(supabase, cdn_domain="cdn.example.com")

    url = storage.upload(b"png", "abc.png", "image/png")

    assert url == "https://cdn.example.com/abc.png"
    supabase.storage.from_.assert_called_with("lad")
    _, kwargs = supabase.storage.from_.return_value.upload.call_args
    assert kwargs["path"] == "abc.png"
    assert kwargs["file"] == b"png"
    assert kwargs["file_options"]["content-type"] == "image/png"


def test_upload_without_cdn_uses_bucket_url(supabase):
    url = make_storage(supabase).upload(b"png", "abc.png", "image/png")
    assert url == "https://project.supabase.co/storage/v1/object/public/lad/abc.png"


def test_client_is_created_once(supabase):
    storage = make_storage(supabase)
    storage.upload(b"a", "a.png", "image/png")
    storage.upload(b"b", "b.png", "image/png")

    storage._client_factory.assert_called_once_with("https://project.supabase.co", "service-key")


def test_client_error_raises_storage_upload_error(supabase):
    supabase.storage.from_.return_value.upload.side_effect = Exception("Bucket not found")

    with pytest.raises(StorageUploadError) as excinfo:
        make_storage(supabase).upload(b"png", "abc.png", "image/png")

    assert excinfo.value.status_code == 502
    assert excinfo.value.context["key"] == "abc.png"
    assert excinfo.value.context["service_name"] == "storage"


def test_error_in_response_raises_storage_upload_error(supabase):
    supabase.storage.from_.return_value.upload.return_value = {"error": "quota exceeded"}

    with pytest.raises(StorageUploadError) as excinfo:
        make_storage(supabase).upload(b"png", "abc.png", "image/png")
    assert "quota exceeded" in excinfo.value.context["error"]


def test_missing_credentials_fail_the_upload(supabase):
    storage = make_storage(supabase, url=None, key=None)

    with pytest.raises(StorageUploadError):
        storage.upload(b"png", "abc.png", "image/png")


def test_missing_credentials_on_client_access(supabase):
    with pytest.raises(ConfigurationError):
        make_storage(supabase, url=None).client


def test_from_config_reads_storage_section():
    storage = ObjectStorage.from_config(
        {"url": "https://x.supabase.co", "key": "k", "bucket": "assets", "cdn_domain": "cdn.example.com"}
    )

    assert storage.bucket == "assets"
    assert storage.public_url("a.png") == "https://cdn.example.com/a.png"
