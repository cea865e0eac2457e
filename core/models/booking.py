"""Booking model."""

import uuid
from typing import ClassVar

from django.db import models


class Booking(models.Model):
    """A purchased package (interview prep, UCAT tutoring, events).

    ``package`` is the free-text package identifier used to target
    event-update emails. ``universities`` holds the student's preference as
    entered, not a normalised list.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.UUIDField(null=True, blank=True)
    tutor_id = models.UUIDField(null=True, blank=True)
    email = models.EmailField(max_length=255, null=True, blank=True)
    package = models.CharField(max_length=100)
    universities = models.TextField(null=True, blank=True)
    field = models.CharField(max_length=50, null=True, blank=True)
    notes = models.TextField(null=True, blank=True)
    status = models.CharField(max_length=32, default="pending")
    payment_status = models.CharField(max_length=32, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "bookings"
        managed = False
        ordering: ClassVar[list[str]] = ["-created_at"]

    def __str__(self) -> str:
        """Return string representation of booking."""
        return f"{self.package} - {self.email}"
