"""Tutor model."""

import uuid
from typing import ClassVar

from django.db import models

from core.enums import TutorRole


class Tutor(models.Model):
    """Tutor profile. The id is the tutor's Supabase Auth user id."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4)
    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=255, unique=True)
    subjects = models.JSONField(default=list)
    role = models.CharField(
        max_length=20,
        choices=[(role.value, role.value) for role in TutorRole],
        default=TutorRole.TUTOR.value,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "tutors"
        managed = False
        ordering: ClassVar[list[str]] = ["-created_at"]

    def __str__(self) -> str:
        """Return string representation of tutor."""
        return f"{self.name} ({self.role})"
