"""PersonalStatement model."""

import uuid
from typing import ClassVar

from django.db import models
from django.utils import timezone

from core.enums import PersonalStatementStatus, StatementType


class PersonalStatement(models.Model):
    """A paid personal statement review.

    The uploaded document lives in the "Personal Statements" storage bucket;
    only its object path is stored here. Reviewer feedback is either a link
    (``feedback_url``) or another object in the same bucket.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(max_length=255)
    first_name = models.CharField(max_length=100, null=True, blank=True)
    last_name = models.CharField(max_length=100, null=True, blank=True)
    statement_type = models.CharField(
        max_length=20,
        choices=[(t.value, t.value) for t in StatementType],
        null=True,
        blank=True,
    )
    personal_statement_file_path = models.CharField(max_length=512)
    stripe_session_id = models.CharField(max_length=255, null=True, blank=True)
    notes = models.TextField(null=True, blank=True)
    reviewed = models.BooleanField(default=False)
    reviewed_at = models.DateTimeField(null=True, blank=True)
    reviewer_email = models.EmailField(max_length=255, null=True, blank=True)
    version = models.IntegerField(default=1)
    status = models.CharField(
        max_length=20,
        choices=[(s.value, s.value) for s in PersonalStatementStatus],
        default=PersonalStatementStatus.PENDING.value,
    )
    feedback_file_path = models.CharField(max_length=512, null=True, blank=True)
    feedback_url = models.URLField(max_length=1024, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "personal_statements"
        managed = False
        ordering: ClassVar[list[str]] = ["-created_at"]

    def __str__(self) -> str:
        """Return string representation of the statement."""
        return f"{self.email} - {self.status}"

    def mark_reviewed(self, reviewer_email: str | None = None) -> None:
        """Flag the statement as reviewed now, without saving."""
        self.reviewed = True
        self.reviewed_at = timezone.now()
        if reviewer_email:
            self.reviewer_email = reviewer_email
