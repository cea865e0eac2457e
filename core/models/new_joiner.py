"""NewJoiner model for tutor applications."""

import uuid
from typing import ClassVar

from django.db import models


class NewJoiner(models.Model):
    """Tutor application submitted through the "join the team" form.

    ``subjects_can_tutor`` and ``availability`` are Postgres text arrays in
    Supabase; they are mapped as JSON lists.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    full_name = models.CharField(max_length=255)
    email = models.EmailField(max_length=255, unique=True)
    phone_number = models.CharField(max_length=50, null=True, blank=True)
    alevel_subjects_grades = models.TextField()
    university_year = models.CharField(max_length=100)
    med_dent_grades = models.TextField()
    ucat = models.CharField(max_length=100)
    med_school_offers = models.TextField()
    subjects_can_tutor = models.JSONField(default=list)
    tutoring_experience = models.TextField()
    why_tutor = models.TextField()
    availability = models.JSONField(default=list)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "new_joiners"
        managed = False
        ordering: ClassVar[list[str]] = ["-created_at"]

    def __str__(self) -> str:
        """Return string representation of the application."""
        return f"{self.full_name} <{self.email}>"
