"""User model."""

import uuid
from typing import ClassVar

from django.db import models

from core.enums import UserRole


class User(models.Model):
    """Row of the Supabase ``users`` table.

    The id is the Supabase Auth user id. Students, tutors and admins all
    live here; only the fields this API reads or writes are mapped.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(max_length=255, unique=True)
    full_name = models.CharField(max_length=255, null=True, blank=True)
    phone_number = models.CharField(max_length=50, null=True, blank=True)
    role = models.CharField(
        max_length=20,
        choices=[(role.value, role.value) for role in UserRole],
        default=UserRole.STUDENT.value,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "users"
        managed = False  # Schema is managed in Supabase
        ordering: ClassVar[list[str]] = ["-created_at"]

    def __str__(self) -> str:
        """Return string representation of user."""
        return f"{self.full_name or self.email} ({self.role})"
