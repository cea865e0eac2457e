"""Interview model."""

import uuid
from typing import ClassVar

from django.db import models


class Interview(models.Model):
    """A scheduled mock interview between a tutor and a student."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    booking = models.ForeignKey(
        "core.Booking",
        on_delete=models.DO_NOTHING,
        null=True,
        blank=True,
        related_name="interviews",
        db_column="booking_id",
        db_constraint=False,
    )
    student_id = models.UUIDField(null=True, blank=True)
    tutor_id = models.UUIDField(null=True, blank=True)
    scheduled_at = models.DateTimeField(null=True, blank=True)
    completed = models.BooleanField(default=False)
    notes = models.TextField(null=True, blank=True)
    zoom_join_url = models.URLField(max_length=1024, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "interviews"
        managed = False
        ordering: ClassVar[list[str]] = ["-scheduled_at"]

    def __str__(self) -> str:
        """Return string representation of interview."""
        return f"Interview {self.id} at {self.scheduled_at}"
