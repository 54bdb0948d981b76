"""
Object storage client.

Wraps a Supabase storage bucket behind a single ``upload`` call that
stores bytes under a key and returns the public URL of the object.
When a CDN domain is configured, URLs point at the CDN instead of the
storage origin.
"""

from functools import cached_property
from typing import Any, Callable, Optional

from supabase import Client, create_client

from lad.core.exceptions import ConfigurationError, StorageUploadError
from lad.core.logging import logger


class ObjectStorage:
    """Upload-and-get-URL access to one storage bucket."""

    def __init__(
        self,
        url: Optional[str],
        key: Optional[str],
        bucket: str,
        cdn_domain: Optional[str] = None,
        client_factory: Callable[[str, str], Client] = create_client,
    ) -> None:
        self.url = url
        self.key = key
        self.bucket = bucket
        self.cdn_domain = cdn_domain
        self._client_factory = client_factory

    @classmethod
    def from_config(cls, storage: Any) -> "ObjectStorage":
        """Build from the ``storage`` section of the configuration."""
        return cls(
            url=storage["url"],
            key=storage["key"],
            bucket=storage["bucket"],
            cdn_domain=storage.get("cdn_domain"),
        )

    @cached_property
    def client(self) -> Client:
        if not self.url or not self.key:
            raise ConfigurationError(
                detail="Object storage credentials are not configured",
                context={"bucket": self.bucket}
            )
        return self._client_factory(self.url, self.key)

    def public_url(self, key: str) -> str:
        if self.cdn_domain:
            return f"https://{self.cdn_domain.strip('/')}/{key}"
        return self.client.storage.from_(self.bucket).get_public_url(key)

    def upload(self, data: bytes, key: str, content_type: str) -> str:
        """
        Store ``data`` under ``key`` and return its public URL.

        Raises:
            StorageUploadError: If the bucket rejects the upload.
        """
        try:
            result = self.client.storage.from_(self.bucket).upload(
                path=key,
                file=data,
                file_options={
                    "content-type": content_type,
                    "cache-control": "31536000",
                    "upsert": "true"
                }
            )

            upload_error = None
            if isinstance(result, dict):
                upload_error = result.get("error")
            elif getattr(result, "error", None):
                upload_error = str(result.error)
            if upload_error:
                raise RuntimeError(upload_error)

            url = self.public_url(key)
        except Exception as e:
            logger.error(
                "Failed to upload object",
                extra={
                    "bucket": self.bucket,
                    "key": key,
                    "error": str(e),
                    "error_type": type(e).__name__
                }
            )
            raise StorageUploadError(
                detail=f"Failed to upload {key} to bucket {self.bucket}",
                key=key,
                context={"bucket": self.bucket, "error": str(e)}
            ) from e

        logger.debug("Uploaded object", extra={"bucket": self.bucket, "key": key})
        return url
