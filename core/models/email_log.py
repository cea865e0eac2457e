"""EmailLog model."""

import uuid
from typing import ClassVar

from django.db import models

from core.enums import EmailLogStatus


class EmailLog(models.Model):
    """One delivery attempt recorded by the mail pipeline."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    recipient_email = models.EmailField(max_length=255)
    subject = models.CharField(max_length=512, null=True, blank=True)
    status = models.CharField(
        max_length=20,
        choices=[(s.value, s.value) for s in EmailLogStatus],
        default=EmailLogStatus.PENDING.value,
    )
    error_message = models.TextField(null=True, blank=True)
    sent_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "email_logs"
        managed = False
        ordering: ClassVar[list[str]] = ["-created_at"]
        indexes: ClassVar[list] = [
            models.Index(fields=["status", "-created_at"]),
        ]
