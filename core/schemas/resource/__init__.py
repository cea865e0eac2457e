"""Resource gating and storage audit schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from core.enums import SubscriptionTier
from core.schemas.base_schema_model import BaseSchemaModel


class CreateResourceRequest(BaseSchemaModel):
    """Body of ``POST /admin/resources``; ``id`` is generated when omitted."""

    id: UUID | None = None
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    file_path: str = Field(..., min_length=1, max_length=512)
    allowed_tiers: list[SubscriptionTier] = Field(..., min_length=1)


class UpdateResourceRequest(BaseSchemaModel):
    """Body of ``PUT /admin/resources/{id}``; omitted fields are unchanged."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    file_path: str | None = Field(None, min_length=1, max_length=512)
    allowed_tiers: list[SubscriptionTier] | None = Field(None, min_length=1)
    is_active: bool | None = None


class ResourceDetail(BaseSchemaModel):
    """Resource as returned by the API."""

    id: UUID
    name: str
    description: str | None = None
    file_path: str
    allowed_tiers: list[str] = Field(default_factory=list)
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ResourceDownload(BaseSchemaModel):
    """Signed download link; serialized by alias as ``downloadUrl``/``expiresIn``."""

    download_url: str
    expires_in: int

class StorageFile(BaseSchemaModel):
    """A file found while walking a storage bucket."""

    name: str
    full_path: str
    size: int = 0
    last_modified: datetime | str | None = None
    content_type: str | None = None
    bucket: str
    extension: str | None = None


class SignedUrlResult(BaseSchemaModel):
    """Signed URL for one path, or the error that prevented minting it."""

    file_path: str
    signed_url: str | None = None
    error: str | None = None


class ReconciliationSummary(BaseSchemaModel):
    """Counts for the three reconciliation sets."""

    storage_files: int
    database_records: int
    matched: int
    missing_in_storage: int
    orphaned_in_storage: int


class ReconciliationReport(BaseSchemaModel):
    """Comparison of bucket contents with ``resources.file_path``.

    - matched: paths present in both
    - missing_in_storage: referenced by a row but absent from the bucket
    - orphaned_in_storage: in the bucket but referenced by no row
    """

    bucket: str
    matched: list[str] = Field(default_factory=list)
    missing_in_storage: list[str] = Field(default_factory=list)
    orphaned_in_storage: list[StorageFile] = Field(default_factory=list)
    suggested_actions: list[str] = Field(default_factory=list)
    summary: ReconciliationSummary


class BucketStatistics(BaseSchemaModel):
    """File count and total size of one bucket."""

    bucket: str
    file_count: int
    total_size: int
    total_size_formatted: str
    error: str | None = None


__all__ = [
    "BucketStatistics",
    "CreateResourceRequest",
    "ReconciliationReport",
    "ReconciliationSummary",
    "ResourceDetail",
    "ResourceDownload",
    "SignedUrlResult",
    "StorageFile",
    "UpdateResourceRequest",
]
