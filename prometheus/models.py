"""Database models for the prometheus app."""

import uuid
from enum import Enum
from typing import ClassVar

from django.db import models


class SessionStatus(str, Enum):
    """Lifecycle of a generation session."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class MockInterviewSession(models.Model):
    """A queued request to generate mock interview questions.

    Rows are inserted as ``pending``; the generator that moves them through
    ``processing`` and fills ``results`` runs outside this API.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    booking_id = models.CharField(max_length=255)
    student_email = models.EmailField(max_length=255)
    universities = models.JSONField(default=list)
    status = models.CharField(
        max_length=20,
        choices=[(s.value, s.value) for s in SessionStatus],
        default=SessionStatus.PENDING.value,
    )
    metadata = models.JSONField(default=dict, blank=True)
    results = models.JSONField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "mock_interview_sessions"
        managed = False
        ordering: ClassVar[list[str]] = ["-created_at"]

    def __str__(self) -> str:
        """Return string representation of the session."""
        return f"{self.booking_id} - {self.status}"
