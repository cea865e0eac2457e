"""Resource model."""

import uuid
from typing import ClassVar

from django.db import models


class Resource(models.Model):
    """Downloadable resource whose file lives in the ``free-resources`` bucket.

    ``file_path`` is expected to equal the object's full path in the bucket;
    the resource audit relies on exact string equality.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(null=True, blank=True)
    file_path = models.CharField(max_length=512)
    allowed_tiers = models.JSONField(default=list)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "resources"
        managed = False
        ordering: ClassVar[list[str]] = ["-created_at"]

    def __str__(self) -> str:
        """Return string representation of resource."""
        return f"{self.name} ({self.file_path})"
