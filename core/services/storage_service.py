"""Thin wrapper over the Supabase Storage client."""

from typing import Any

from django.conf import settings

import structlog
from supabase import Client, create_client

from core.exceptions import ExternalServiceError

logger = structlog.get_logger(__name__)

LIST_PAGE_SIZE = 1000


class StorageService:
    """Uploads, listings and signed URLs against Supabase Storage buckets.

    Client errors are logged and re-raised as ``ExternalServiceError`` so the
    API answers with the standard error envelope.
    """

    service_name = "supabase_storage"

    def __init__(self, client: Client | None = None) -> None:
        """Initialize storage service.

        Args:
            client: Supabase client; built from settings on first use
        """
        self._client = client

    @property
    def client(self) -> Client:
        """Supabase client, created lazily from SUPABASE_URL/SUPABASE_KEY."""
        if self._client is None:
            if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
                raise ExternalServiceError(
                    "Storage is not configured", service_name=self.service_name
                )
            self._client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
        return self._client

    def upload(
        self, bucket: str, path: str, content: bytes, content_type: str
    ) -> str:
        """Upload ``content`` to ``bucket/path`` without overwriting.

        Returns:
            The object path that was written
        """
        try:
            self.client.storage.from_(bucket).upload(
                path,
                content,
                {"content-type": content_type, "upsert": "false"},
            )
        except ExternalServiceError:
            raise
        except Exception as e:
            logger.error(
                "storage_upload_failed",
                bucket=bucket,
                path=path,
                error=str(e),
            )
            raise ExternalServiceError(
                f"Failed to upload file: {e}", service_name=self.service_name
            ) from e

        logger.info("storage_upload_succeeded", bucket=bucket, path=path, size=len(content))
        return path

    def list_objects(self, bucket: str, prefix: str = "") -> list[dict[str, Any]]:
        """List one level of ``bucket`` under ``prefix``, all pages.

        Returns:
            Raw entries as returned by Supabase; folders have ``id`` None
        """
        entries: list[dict[str, Any]] = []
        offset = 0
        try:
            while True:
                page = self.client.storage.from_(bucket).list(
                    prefix,
                    {
                        "limit": LIST_PAGE_SIZE,
                        "offset": offset,
                        "sortBy": {"column": "name", "order": "asc"},
                    },
                )
                entries.extend(page or [])
                if not page or len(page) < LIST_PAGE_SIZE:
                    break
                offset += LIST_PAGE_SIZE
        except ExternalServiceError:
            raise
        except Exception as e:
            logger.error("storage_list_failed", bucket=bucket, prefix=prefix, error=str(e))
            raise ExternalServiceError(
                f"Failed to list files: {e}", service_name=self.service_name
            ) from e
        return entries

    def create_signed_url(self, bucket: str, path: str, expires_in: int) -> str:
        """Create a time-limited download URL for ``bucket/path``."""
        try:
            result = self.client.storage.from_(bucket).create_signed_url(path, expires_in)
        except ExternalServiceError:
            raise
        except Exception as e:
            logger.error(
                "storage_signed_url_failed",
                bucket=bucket,
                path=path,
                error=str(e),
            )
            raise ExternalServiceError(
                f"Failed to generate signed URL: {e}", service_name=self.service_name
            ) from e

        # Older storage clients return "signedURL", newer ones "signedUrl"
        signed_url = result.get("signedURL") or result.get("signedUrl")
        if not signed_url:
            raise ExternalServiceError(
                "Failed to generate signed URL", service_name=self.service_name
            )
        return signed_url

    def list_buckets(self) -> list[str]:
        """Return the names of every bucket in the project."""
        try:
            buckets = self.client.storage.list_buckets()
        except ExternalServiceError:
            raise
        except Exception as e:
            logger.error("storage_list_buckets_failed", error=str(e))
            raise ExternalServiceError(
                f"Failed to list buckets: {e}", service_name=self.service_name
            ) from e
        return [getattr(bucket, "name", None) or bucket["name"] for bucket in buckets]


storage_service = StorageService()
