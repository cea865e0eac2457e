"""Audit of storage bucket contents against the ``resources`` table."""

import os
from typing import Any

from django.conf import settings

import structlog

from core.exceptions import ExternalServiceError
from core.repositories import ResourceRepository
from core.schemas.resource import (
    BucketStatistics,
    ReconciliationReport,
    ReconciliationSummary,
    SignedUrlResult,
    StorageFile,
)
from core.services.storage_service import StorageService, storage_service

logger = structlog.get_logger(__name__)

SIZE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")


def format_file_size(size: int) -> str:
    """Render a byte count with a 1024 base, e.g. ``1.5 KB``.

    Args:
        size: Number of bytes

    Returns:
        Human-readable size with at most two decimals
    """
    if size <= 0:
        return "0 Bytes"
    exponent = 0
    while exponent < len(SIZE_UNITS) - 1 and size >= 1024 ** (exponent + 1):
        exponent += 1
    value = round(size / 1024**exponent, 2)
    return f"{value:g} {SIZE_UNITS[exponent]}"


class ResourceAuditService:
    """Finds resources whose file is missing and files no resource uses.

    Matching is exact string equality between ``resources.file_path`` and
    the object's full path inside the bucket.
    """

    def __init__(
        self,
        storage: StorageService = storage_service,
        resource_repository: type[ResourceRepository] = ResourceRepository,
    ) -> None:
        """Initialize the audit service."""
        self.storage = storage
        self.resources = resource_repository

    def list_files(self, bucket: str | None = None, prefix: str = "") -> list[StorageFile]:
        """Walk ``bucket`` from ``prefix`` down and return every file.

        Entries without an id are folders and are descended into; there is
        no depth limit.
        """
        bucket = bucket or settings.RESOURCES_BUCKET
        files: list[StorageFile] = []

        for entry in self.storage.list_objects(bucket, prefix):
            path = f"{prefix}/{entry['name']}" if prefix else entry["name"]
            if entry.get("id") is None:
                files.extend(self.list_files(bucket, path))
                continue
            files.append(self._to_storage_file(bucket, path, entry))

        return files

    def reconcile(self, bucket: str | None = None) -> ReconciliationReport:
        """Compare the bucket's files with the paths recorded in the table."""
        bucket = bucket or settings.RESOURCES_BUCKET
        storage_files = self.list_files(bucket)
        # Duplicate rows collapse onto one path
        db_paths = list(dict.fromkeys(self.resources.get_file_paths()))

        storage_by_path = {f.full_path: f for f in storage_files}
        db_path_set = set(db_paths)

        matched = [path for path in db_paths if path in storage_by_path]
        missing = [path for path in db_paths if path not in storage_by_path]
        orphaned = [f for f in storage_files if f.full_path not in db_path_set]

        actions = [f"Upload file for resource path: {path}" for path in missing]
        actions += [f"Create database entry for file: {f.full_path}" for f in orphaned]

        report = ReconciliationReport(
            bucket=bucket,
            matched=matched,
            missing_in_storage=missing,
            orphaned_in_storage=orphaned,
            suggested_actions=actions,
            summary=ReconciliationSummary(
                storage_files=len(storage_files),
                database_records=len(db_paths),
                matched=len(matched),
                missing_in_storage=len(missing),
                orphaned_in_storage=len(orphaned),
            ),
        )
        logger.info("resources_reconciled", bucket=bucket, **report.summary.model_dump())
        return report

    def generate_signed_urls(
        self,
        paths: list[str],
        bucket: str | None = None,
        expires_in: int | None = None,
    ) -> list[SignedUrlResult]:
        """Sign every path, recording per-path failures instead of raising."""
        bucket = bucket or settings.RESOURCES_BUCKET
        expires_in = expires_in or settings.SIGNED_URL_EXPIRY_SECONDS

        results = []
        for path in paths:
            try:
                url = self.storage.create_signed_url(bucket, path, expires_in)
            except ExternalServiceError as e:
                logger.warning("signed_url_failed", bucket=bucket, path=path, error=e.message)
                results.append(SignedUrlResult(file_path=path, error=e.message))
                continue
            results.append(SignedUrlResult(file_path=path, signed_url=url))
        return results

    def storage_statistics(self) -> list[BucketStatistics]:
        """File count and total size for every bucket in the project.

        A bucket that cannot be listed is reported with its error.
        """
        stats = []
        for bucket in self.storage.list_buckets():
            try:
                files = self.list_files(bucket)
            except ExternalServiceError as e:
                stats.append(
                    BucketStatistics(
                        bucket=bucket,
                        file_count=0,
                        total_size=0,
                        total_size_formatted=format_file_size(0),
                        error=e.message,
                    )
                )
                continue

            total_size = sum(f.size for f in files)
            stats.append(
                BucketStatistics(
                    bucket=bucket,
                    file_count=len(files),
                    total_size=total_size,
                    total_size_formatted=format_file_size(total_size),
                )
            )
        return stats

    @staticmethod
    def _to_storage_file(bucket: str, path: str, entry: dict[str, Any]) -> StorageFile:
        metadata = entry.get("metadata") or {}
        return StorageFile(
            name=entry["name"],
            full_path=path,
            size=metadata.get("size") or 0,
            last_modified=entry.get("updated_at"),
            content_type=metadata.get("mimetype") or "unknown",
            bucket=bucket,
            extension=os.path.splitext(entry["name"])[1].lower() or None,
        )


resource_audit_service = ResourceAuditService()
